"""
Tests for the top-level public API.
"""
import importa


def test_has_a_version_number():
    assert importa.__version__ is not None


def test_public_api_round_trip(member_record, member_values, memory_sink):
    schema = (
        importa.SchemaBuilder()
        .field("first_name")
        .field("last_name")
        .field("dob", "date")
        .field("member_id")
        .field("effective_date", "date")
        .field("expiry_date", "date", optional=True)
        .field("phone_number", "phone", optional=True)
        .build()
    )
    reporter = importa.Reporter(sinks=[memory_sink])

    assert importa.transform_batch(schema, [member_record], reporter) == [member_values]
    assert reporter.transformed_records == 1


def test_errors_share_a_base():
    for error in (
        importa.SchemaError,
        importa.UnknownFormatterError,
        importa.DuplicateFieldError,
        importa.SchemaLoadError,
    ):
        assert issubclass(error, importa.ImportaError)
