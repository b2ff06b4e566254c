"""
Validation helpers and grouped assertions.
"""

from filmcheck.validation.assertions import AssertionFailure, SoftAssertions, assert_all
from filmcheck.validation.checks import (
    validate_all_titles_start_with,
    validate_api_response_structure,
    validate_bad_request,
    validate_connection_uri,
    validate_empty_response,
    validate_film_data_integrity,
    validate_fixture_running,
    validate_performance,
    validate_response_structure_consistency,
    validate_seed_loaded,
    validate_successful_response,
)

__all__ = [
    "AssertionFailure",
    "SoftAssertions",
    "assert_all",
    "validate_all_titles_start_with",
    "validate_api_response_structure",
    "validate_bad_request",
    "validate_connection_uri",
    "validate_empty_response",
    "validate_film_data_integrity",
    "validate_fixture_running",
    "validate_performance",
    "validate_response_structure_consistency",
    "validate_seed_loaded",
    "validate_successful_response",
]
