from datetime import date

from moto import mock_aws

from tests.function import TstFunction


@mock_aws
class TestClient(TstFunction):
    def test_put_record(self):
        from data_model.client import DataClient
        from data_model.compliance_record import ComplianceRecord

        record = ComplianceRecord.create_new(self._load_submission())

        DataClient(self.config).put_record(record)

        item = self._table.get_item(Key={'pk': 'A0001', 'sk': '2024-07-30'})['Item']
        self.assertEqual(record.serialize_to_database_record(), item)
        self.assertNotIn('tagNumber', item)
        self.assertNotIn('retestDate', item)

    def test_put_record_overwrites_same_tag_number(self):
        from data_model.client import DataClient
        from data_model.compliance_record import ComplianceRecord

        client = DataClient(self.config)
        client.put_record(ComplianceRecord.create_new(self._load_submission(description='Kettle')))
        client.put_record(ComplianceRecord.create_new(self._load_submission(description='Toaster')))

        records = client.scan_all()
        self.assertEqual(['Toaster'], [record.description for record in records])

    def test_put_record_retest_replaces_earlier_test(self):
        from data_model.client import DataClient
        from data_model.compliance_record import ComplianceRecord

        client = DataClient(self.config)
        client.put_record(ComplianceRecord.create_new(self._load_submission(environment='DC', date='2022-01-01')))
        self._put_appliance(tagNumber='A0002', environment='DC', date='2022-01-01')
        client.put_record(ComplianceRecord.create_new(self._load_submission(environment='DC', date='2024-01-01')))

        records = [record for record in client.scan_all() if record.tagNumber == 'A0001']
        self.assertEqual([date(2025, 1, 1)], [record.retestDate for record in records])
        # The earlier test's retest date of 2023-01-01 must not show up as overdue
        self.assertEqual(['A0002'], [record.tagNumber for record in client.scan_overdue(date(2024, 1, 1))])

    def test_scan_all_round_trip(self):
        from data_model.client import DataClient

        expected = self._put_appliance(environment='DC', date='2024-01-31')

        records = DataClient(self.config).scan_all()

        self.assertEqual([expected.to_dict()], [record.to_dict() for record in records])
        self.assertEqual(date(2025, 1, 31), records[0].retestDate)

    def test_scan_all_empty(self):
        from data_model.client import DataClient

        self.assertEqual([], DataClient(self.config).scan_all())

    def test_scan_all_spans_pages(self):
        from data_model.client import DataClient

        self.config.scan_page_size = 3
        self.addCleanup(delattr, self.config, 'scan_page_size')
        for i in range(10):
            self._put_appliance(tagNumber=f'A{i:04}')

        records = DataClient(self.config).scan_all()

        self.assertEqual({f'A{i:04}' for i in range(10)}, {record.tagNumber for record in records})
        self.assertEqual(10, len(records))

    def test_scan_by_voltage(self):
        from data_model.client import DataClient

        self._put_appliance(tagNumber='A0240', voltage='240')
        self._put_appliance(tagNumber='A0115', voltage='115')
        self._put_appliance(tagNumber='A0012', voltage='12')

        client = DataClient(self.config)

        self.assertEqual(['A0240'], [record.tagNumber for record in client.scan_by_voltage(240)])
        self.assertEqual(['A0115'], [record.tagNumber for record in client.scan_by_voltage(115)])
        self.assertEqual([], client.scan_by_voltage(48))

    def test_scan_by_voltage_spans_pages(self):
        from data_model.client import DataClient

        self.config.scan_page_size = 2
        self.addCleanup(delattr, self.config, 'scan_page_size')
        for i in range(6):
            self._put_appliance(tagNumber=f'B{i:04}', voltage='240')
            self._put_appliance(tagNumber=f'C{i:04}', voltage='115')

        records = DataClient(self.config).scan_by_voltage(240)

        self.assertEqual({f'B{i:04}' for i in range(6)}, {record.tagNumber for record in records})

    def test_scan_overdue(self):
        from data_model.client import DataClient

        # DC retests are due twelve months after testing
        self._put_appliance(tagNumber='A2023', environment='DC', date='2022-01-01')
        self._put_appliance(tagNumber='A2024', environment='DC', date='2023-06-01')
        self._put_appliance(tagNumber='A2025', environment='DC', date='2024-01-01')

        records = DataClient(self.config).scan_overdue(date(2024, 1, 1))

        self.assertEqual(['A2023'], [record.tagNumber for record in records])
        self.assertEqual(date(2023, 1, 1), records[0].retestDate)

    def test_scan_overdue_excludes_due_today(self):
        from data_model.client import DataClient

        self._put_appliance(tagNumber='A2024', environment='DC', date='2023-01-01')

        client = DataClient(self.config)

        self.assertEqual([], client.scan_overdue(date(2024, 1, 1)))
        self.assertEqual(['A2024'], [record.tagNumber for record in client.scan_overdue(date(2024, 1, 2))])

    def test_corrupt_item_skipped(self):
        from data_model.client import DataClient

        self._put_appliance(tagNumber='A0001')
        self._put_appliance(tagNumber='A0002')
        corrupt = self._put_appliance(tagNumber='A0003').serialize_to_database_record()
        del corrupt['environment']
        self._table.put_item(Item=corrupt)

        records = DataClient(self.config).scan_all()

        self.assertEqual({'A0001', 'A0002'}, {record.tagNumber for record in records})
