from marshmallow import EXCLUDE, RAISE, Schema, ValidationError, pre_load
from marshmallow.fields import Date

from data_model.retest_schedule import parse_date
from exceptions import ARDateFormatException


class StrictSchema(Schema):
    """
    Base Schema explicitly stating what we do if unknown fields are included - raise an error
    """

    class Meta:
        unknown = RAISE


class ForgivingSchema(Schema):
    """
    Base schema that will silently remove any unknown fields that are included
    """

    class Meta:
        unknown = EXCLUDE


class StringAttributeSchema(StrictSchema):
    """
    Base schema for data that arrives with every value encoded as a string

    Both submissions from the API and items scanned out of the appliance table carry typed values (numbers, dates,
    environment labels) as strings. Anything else is rejected before field parsing.
    """

    @pre_load
    def require_string_values(self, in_data, **kwargs):  # noqa: ARG002 unused-argument
        if not isinstance(in_data, dict):
            # Let the schema report its standard invalid input error
            return in_data
        errors = {key: ['Not a string.'] for key, value in in_data.items() if not isinstance(value, str)}
        if errors:
            raise ValidationError(errors)
        return in_data


class CanonicalDate(Date):
    """
    Date field that only accepts the canonical YYYY-MM-DD form
    """

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return parse_date(value)
        except ARDateFormatException as e:
            raise ValidationError(e.message) from e
