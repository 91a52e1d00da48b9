import json
import os
import unittest
from unittest.mock import patch

from langchain_core.messages import HumanMessage, SystemMessage

from config import Config
from fakes import FakeLLM
from services.errors import ConfigurationError, ValidationError
from services.models import WaitlistOptimizationResult
from services.utils import get_llm
from services.waitlist_service import WaitlistService

RESERVATIONS = json.dumps([{'name': 'Ana', 'partySize': 2, 'arrival': '19:00'}])
TABLES = json.dumps([{'id': 'T1', 'capacity': 2, 'status': 'available'}])
WAITLIST = json.dumps([{'name': 'Ben', 'partySize': 4, 'arrival': '19:10'}])


class WaitlistServiceTest(unittest.TestCase):
    def setUp(self):
        self.answer = WaitlistOptimizationResult(
            suggested_seating_arrangements='[{"table": "T1", "party": "Ana"}]',
            estimated_wait_times='[{"party": "Ben", "minutes": 25}]',
            occupancy_rate=85.0
        )
        self.llm = FakeLLM(self.answer)
        self.service = WaitlistService(llm=self.llm)

    def test_returns_model_answer(self):
        result = self.service.optimize(RESERVATIONS, TABLES, WAITLIST)
        self.assertEqual(result, self.answer)
        self.assertIs(self.llm.schema, WaitlistOptimizationResult)

    def test_prompt_carries_all_inputs(self):
        self.service.optimize(RESERVATIONS, TABLES, WAITLIST)
        system, human = self.llm.messages
        self.assertIsInstance(system, SystemMessage)
        self.assertIsInstance(human, HumanMessage)
        for blob in (RESERVATIONS, TABLES, WAITLIST):
            self.assertIn(blob, human.content)

    def test_rejects_invalid_json(self):
        for args in (('not json', TABLES, WAITLIST), (RESERVATIONS, '', WAITLIST), (RESERVATIONS, TABLES, None)):
            with self.subTest(args=args):
                with self.assertRaises(ValidationError):
                    self.service.optimize(*args)
        self.assertIsNone(self.llm.messages)


class GetLlmTest(unittest.TestCase):
    def test_missing_key_is_a_configuration_error(self):
        with patch.dict(os.environ, {'OPENAI_API_KEY': ''}), patch.object(Config, 'OPENAI_API_KEY', ''):
            with self.assertRaises(ConfigurationError):
                get_llm()


if __name__ == '__main__':
    unittest.main()
