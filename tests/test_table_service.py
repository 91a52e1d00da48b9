import unittest

from fakes import FakeFirebaseService
from services.errors import ValidationError
from services.table_service import TableService, normalize_table


class TableServiceTest(unittest.TestCase):
    def setUp(self):
        self.firebase = FakeFirebaseService()
        self.service = TableService(self.firebase)

    def add(self, name, status='available', capacity=2, owner_uid='owner1'):
        return self.service.add_table(owner_uid, {'name': name, 'capacity': capacity, 'status': status})

    def test_add_table_stores_owner(self):
        table = self.service.add_table('owner1', {'name': ' Patio 1 ', 'capacity': 4, 'location': 'Patio'})
        self.assertEqual(table['name'], 'Patio 1')
        self.assertEqual(table['status'], 'available')
        self.assertEqual(self.firebase.tables[table['id']]['ownerUID'], 'owner1')

    def test_add_table_validation(self):
        for data in ({'capacity': 2}, {'name': 'T1', 'capacity': 0}, {'name': 'T1', 'capacity': 51},
                     {'name': 'T1', 'capacity': True}, {'name': 'T1', 'capacity': 2, 'status': 'broken'},
                     {'name': 'T1', 'capacity': 2, 'location': 'x' * 51}):
            with self.subTest(data=data):
                with self.assertRaises(ValidationError):
                    self.service.add_table('owner1', data)
        self.assertEqual(self.firebase.tables, {})

    def test_tables_are_per_tenant_and_sorted(self):
        self.add('B2')
        self.add('A1')
        self.add('Other', owner_uid='owner2')
        self.assertEqual([t['name'] for t in self.service.get_tables('owner1')], ['A1', 'B2'])

    def test_missing_fields_get_defaults(self):
        table = normalize_table({'id': 'abc'})
        self.assertEqual((table['name'], table['capacity'], table['status'], table['location']),
                         ('Unnamed Table abc', 1, 'available', ''))

    def test_update_and_delete(self):
        table_id = self.add('T1')['id']
        self.assertEqual(self.service.update_table('owner1', table_id, {'status': 'occupied'})['status'], 'occupied')
        self.assertIsNone(self.service.update_table('owner2', table_id, {'status': 'reserved'}))
        with self.assertRaises(ValidationError):
            self.service.update_table('owner1', table_id, {})

        self.assertFalse(self.service.delete_table('owner2', table_id))
        self.assertTrue(self.service.delete_table('owner1', table_id))
        self.assertEqual(self.firebase.tables, {})

    def test_counts_and_occupancy(self):
        for name, status in (('T1', 'available'), ('T2', 'occupied'), ('T3', 'reserved'),
                             ('T4', 'cleaning'), ('T5', 'available'), ('T6', 'available'),
                             ('T7', 'available'), ('T8', 'available')):
            self.add(name, status)
        self.assertEqual(self.service.get_available_tables_count('owner1'), 5)
        # 2 of 8 busy
        self.assertEqual(self.service.get_occupancy_rate('owner1'), 25)

    def test_occupancy_rounds_half_up(self):
        self.add('T1', 'occupied')
        for name in ('T2', 'T3', 'T4', 'T5', 'T6', 'T7', 'T8'):
            self.add(name)
        self.assertEqual(self.service.get_occupancy_rate('owner1'), 13)

    def test_no_tables_or_read_failure_give_zero(self):
        self.assertEqual(self.service.get_occupancy_rate('owner1'), 0)
        self.add('T1', 'occupied')
        self.firebase.fail_tables = True
        self.assertEqual(self.service.get_occupancy_rate('owner1'), 0)
        self.assertEqual(self.service.get_available_tables_count('owner1'), 0)

    def test_batch_update_statuses(self):
        ids = [self.add('T1')['id'], self.add('T2')['id']]
        self.service.batch_update_statuses('owner1', ids, 'reserved')
        self.assertEqual([self.firebase.tables[i]['status'] for i in ids], ['reserved', 'reserved'])

        with self.assertRaises(ValidationError):
            self.service.batch_update_statuses('owner1', ids, 'lost')
        with self.assertRaises(ValidationError):
            self.service.batch_update_statuses('owner1', [], 'available')


if __name__ == '__main__':
    unittest.main()
