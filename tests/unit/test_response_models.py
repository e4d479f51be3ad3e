"""Unit tests for tool response models."""

import json
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from postgres_mcp.models.tool_responses import (
    ErrorResponse,
    QueryResponse,
    TableDetailsResponse,
    TablesResponse,
    to_json,
)


class TestQueryResponse:
    """Query tool payload."""

    def test_serialises_database_types(self):
        response = QueryResponse(
            rows=[{'id': 1, 'price': Decimal('9.50'), 'day': date(2024, 1, 2), 'note': None}],
            row_count=1,
            execution_time_ms=1.5
        )

        payload = json.loads(to_json(response))

        assert payload['row_count'] == 1
        assert payload['rows'][0]['id'] == 1
        assert payload['rows'][0]['day'] == '2024-01-02'
        assert payload['rows'][0]['note'] is None

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            QueryResponse(rows=[], row_count=-1, execution_time_ms=0)


class TestTableResponses:
    """Resource payloads."""

    def test_tables_response(self):
        response = TablesResponse(
            count=1,
            tables=[{'table_schema': 'public', 'table_name': 'users'}]
        )
        payload = json.loads(to_json(response))
        assert payload == {'count': 1, 'tables': [{'table_schema': 'public', 'table_name': 'users'}]}

    def test_table_details_uses_schema_key(self):
        details = TableDetailsResponse.model_validate({
            'schema': {
                'schema': 'public',
                'table': 'users',
                'columns': [{
                    'column_name': 'id',
                    'data_type': 'integer',
                    'is_nullable': 'NO',
                    'column_default': None
                }]
            },
            'sample_rows': [{'id': 1}]
        })

        payload = json.loads(to_json(details))

        assert payload['schema']['schema'] == 'public'
        assert payload['schema']['table'] == 'users'
        assert payload['schema']['columns'][0]['column_name'] == 'id'
        assert payload['sample_rows'] == [{'id': 1}]


class TestErrorResponse:
    """Error payload."""

    def test_minimal_error(self):
        payload = json.loads(to_json(ErrorResponse(error="nope", recoverable=True)))
        assert payload['error'] == "nope"
        assert payload['recoverable'] is True

    def test_position_must_be_positive(self):
        with pytest.raises(ValidationError):
            ErrorResponse(error="nope", recoverable=True, statement_position=0)
