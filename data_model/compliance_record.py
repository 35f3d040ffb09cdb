# ruff: noqa: N802 invalid-name
from copy import deepcopy
from datetime import date
from decimal import Decimal
from typing import Any

from marshmallow import ValidationError

from data_model.retest_schedule import EnvironmentClass
from data_model.schema.api import ComplianceRecordPostSchema
from data_model.schema.compliance_record import ComplianceRecordSchema
from exceptions import ARDeserializationException, ARInvalidRequestException


class ComplianceRecord:
    """
    One safety test of one appliance, plus the date it is next due for testing

    This data class provides an abstraction layer between the data model and the database schema. Records must be
    instantiated using one of the class factory methods:
    1. create_new(): For a new test result, as submitted to the API
    2. from_database_record(): For loading an existing record from the database

    The retest date is derived from the test date and environment and cannot be set directly.
    """

    _post_schema = ComplianceRecordPostSchema()
    _record_schema = ComplianceRecordSchema()

    def __init__(self, data: dict[str, Any], _is_from_factory: bool = False):
        if not _is_from_factory:
            raise ValueError(
                'Direct construction not allowed. Use create_new() or from_database_record() class methods instead.'
            )
        self._data = data

    @classmethod
    def create_new(cls, submission: dict[str, str]) -> 'ComplianceRecord':
        """
        Create a new record from the raw string fields of a submission.

        :param submission: name, description, insulationResistance, resistanceToEarth, voltage, testedBy, tagNumber,
        environment and date, all as strings
        :raises ARInvalidRequestException: If any field is missing or fails to parse
        """
        try:
            data = cls._post_schema.load(submission)
        except ValidationError as e:
            raise ARInvalidRequestException(f'Invalid request: {e.messages}') from e

        # Serialize and deserialize to populate the retest date and validate the result
        return cls(cls._record_schema.load(cls._record_schema.dump(data)), _is_from_factory=True)

    @classmethod
    def from_database_record(cls, item: dict[str, Any]) -> 'ComplianceRecord':
        """
        Load a record from an appliance table item.

        :raises ARDeserializationException: If the item is missing an attribute, has a non-string attribute, or an
        attribute fails to parse
        """
        try:
            return cls(cls._record_schema.load(item), _is_from_factory=True)
        except ValidationError as e:
            raise ARDeserializationException(f'Invalid compliance record: {e.messages}') from e

    def serialize_to_database_record(self) -> dict[str, str]:
        return self._record_schema.dump(deepcopy(self._data))

    def to_dict(self) -> dict[str, Any]:
        """
        Return a copy of the internal data dictionary

        DO NOT use this method for generating database records. Use serialize_to_database_record instead.
        """
        return deepcopy(self._data)

    @property
    def name(self) -> str:
        return self._data['name']

    @property
    def description(self) -> str:
        return self._data['description']

    @property
    def insulationResistance(self) -> Decimal:
        """Insulation resistance, in megaohms"""
        return self._data['insulationResistance']

    @property
    def resistanceToEarth(self) -> Decimal:
        """Resistance to earth, in ohms"""
        return self._data['resistanceToEarth']

    @property
    def voltage(self) -> int:
        return self._data['voltage']

    @property
    def testedBy(self) -> str:
        return self._data['testedBy']

    @property
    def tagNumber(self) -> str:
        return self._data['tagNumber']

    @property
    def environment(self) -> EnvironmentClass:
        return self._data['environment']

    @property
    def testDate(self) -> date:
        return self._data['testDate']

    @property
    def retestDate(self) -> date:
        return self._data['retestDate']
