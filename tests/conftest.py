"""
Shared fixtures for the FraudScan test suite
"""

import pytest
from fastapi.testclient import TestClient

from fraudscan.core.email_analyzer import EmailAnalyzer
from fraudscan.core.rule_tables import DEFAULT_RULES
from fraudscan.core.url_analyzer import UrlAnalyzer
from fraudscan.services.history import get_scan_history


@pytest.fixture
def rules():
    return DEFAULT_RULES


@pytest.fixture
def email_analyzer(rules):
    return EmailAnalyzer(rules)


@pytest.fixture
def url_analyzer(rules):
    return UrlAnalyzer(rules)


@pytest.fixture
def client():
    from main import app

    get_scan_history().clear()
    with TestClient(app) as test_client:
        yield test_client
    get_scan_history().clear()
