# ruff: noqa: N815 invalid-name
from marshmallow import ValidationError, post_load, validates_schema
from marshmallow.fields import Date, Decimal, Enum, Integer, String
from marshmallow.validate import Length

from data_model.retest_schedule import EnvironmentClass, compute_retest
from data_model.schema.base_record import CanonicalDate, ForgivingSchema, StringAttributeSchema


class ComplianceRecordPostSchema(StringAttributeSchema):
    """
    Schema for a test result as submitted to the API

    All values are submitted as strings and parsed into their typed form here.
    """

    name = String(required=True, allow_none=False)
    description = String(required=True, allow_none=False)
    insulationResistance = Decimal(required=True, allow_none=False)
    resistanceToEarth = Decimal(required=True, allow_none=False)
    voltage = Integer(required=True, allow_none=False)
    testedBy = String(required=True, allow_none=False)
    tagNumber = String(required=True, allow_none=False, validate=Length(min=1))
    environment = Enum(EnvironmentClass, by_value=True, required=True, allow_none=False)
    date = CanonicalDate(required=True, allow_none=False)

    @validates_schema
    def validate_retest_date_in_range(self, data, **kwargs):  # noqa: ARG002 unused-argument
        try:
            compute_retest(data['date'], data['environment'])
        except ValueError as e:
            raise ValidationError({'date': ['Retest date falls beyond the last supported date.']}) from e

    @post_load
    def rename_test_date(self, in_data, **kwargs):  # noqa: ARG002 unused-argument
        in_data['testDate'] = in_data.pop('date')
        return in_data


class ComplianceRecordResponseSchema(ForgivingSchema):
    """
    Schema for compliance records as returned by the API
    """

    name = String(required=True, allow_none=False)
    description = String(required=True, allow_none=False)
    insulationResistance = Decimal(required=True, allow_none=False)
    resistanceToEarth = Decimal(required=True, allow_none=False)
    voltage = Integer(required=True, allow_none=False)
    testedBy = String(required=True, allow_none=False)
    tagNumber = String(required=True, allow_none=False)
    environment = Enum(EnvironmentClass, by_value=True, required=True, allow_none=False)
    testDate = Date(required=True, allow_none=False)
    retestDate = Date(required=True, allow_none=False)
