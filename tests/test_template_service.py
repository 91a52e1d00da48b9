import unittest

from fakes import FakeFirebaseService
from services.errors import AuthenticationRequiredError, InvalidArgumentError
from services.models import TemplateId
from services.template_service import DEFAULT_TEMPLATES, TemplateService, get_default_template


class GetTemplateTest(unittest.TestCase):
    def setUp(self):
        self.firebase = FakeFirebaseService()
        self.service = TemplateService(self.firebase)

    def test_every_kind_has_a_default(self):
        for template_id in TemplateId:
            template = self.service.get_template(template_id.value, 'owner1')
            self.assertEqual(template.subject, DEFAULT_TEMPLATES[template_id]['subject'])
            self.assertEqual(template.body, DEFAULT_TEMPLATES[template_id]['body'])
            self.assertIsNone(template.updated_at)

    def test_no_owner_returns_default(self):
        template = self.service.get_template('waitingList', None)
        self.assertEqual(template, get_default_template(TemplateId.WAITING_LIST))

    def test_override_takes_precedence(self):
        self.firebase.overrides[('owner1', 'bookingAccepted')] = {'subject': 'S', 'body': 'B'}
        template = self.service.get_template('bookingAccepted', 'owner1')
        self.assertEqual((template.subject, template.body), ('S', 'B'))
        self.assertIn('{{notes}}', template.placeholders)

    def test_empty_override_fields_fall_back(self):
        self.firebase.overrides[('owner1', 'noAvailability')] = {'subject': '', 'body': 'Custom body'}
        template = self.service.get_template('noAvailability', 'owner1')
        self.assertEqual(template.subject, DEFAULT_TEMPLATES[TemplateId.NO_AVAILABILITY]['subject'])
        self.assertEqual(template.body, 'Custom body')

    def test_overrides_are_per_tenant(self):
        self.firebase.overrides[('owner1', 'bookingAccepted')] = {'subject': 'S', 'body': 'B'}
        template = self.service.get_template('bookingAccepted', 'owner2')
        self.assertEqual(template.subject, DEFAULT_TEMPLATES[TemplateId.BOOKING_ACCEPTED]['subject'])

    def test_lookup_failure_degrades_to_default(self):
        self.firebase.fail_overrides = True
        template = self.service.get_template('upgradePlan', 'owner1')
        self.assertEqual(template, get_default_template(TemplateId.UPGRADE_PLAN))

    def test_unrecognized_id_never_raises(self):
        self.firebase.overrides[('owner1', 'bookingAccepted')] = {'subject': 'S', 'body': 'B'}
        for template_id in ('birthdayPromo', '', None):
            with self.subTest(template_id=template_id):
                template = self.service.get_template(template_id, 'owner1')
                self.assertEqual(template, get_default_template(TemplateId.BOOKING_ACCEPTED))

    def test_list_templates(self):
        templates = self.service.list_templates('owner1')
        self.assertEqual([t.id for t in templates], list(TemplateId))


class SaveTemplateTest(unittest.TestCase):
    def setUp(self):
        self.firebase = FakeFirebaseService()
        self.service = TemplateService(self.firebase)

    def test_save_then_get_round_trip(self):
        self.service.save_template('bookingAccepted', 'owner1', 'S', 'B')
        template = self.service.get_template('bookingAccepted', 'owner1')
        self.assertEqual(template.subject, 'S')
        self.assertEqual(template.body, 'B')
        self.assertIsNotNone(template.updated_at)

    def test_save_updates_existing_override(self):
        self.service.save_template('waitingList', 'owner1', 'S1', 'B1')
        self.service.save_template('waitingList', 'owner1', 'S2', 'B2')
        self.assertEqual(self.firebase.overrides[('owner1', 'waitingList')]['subject'], 'S2')

    def test_save_requires_owner(self):
        with self.assertRaises(AuthenticationRequiredError):
            self.service.save_template('bookingAccepted', None, 'S', 'B')
        self.assertEqual(self.firebase.overrides, {})

    def test_save_rejects_bad_ids(self):
        for template_id in ('', '   ', None, 'unknown'):
            with self.subTest(template_id=template_id):
                with self.assertRaises(InvalidArgumentError):
                    self.service.save_template(template_id, 'owner1', 'S', 'B')


if __name__ == '__main__':
    unittest.main()
