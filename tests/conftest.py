"""
Test Configuration and Fixtures
"""
import os
import pytest
from docbridge import create_app
from docbridge.models import ActionItem, GeneratedPlan, Priority, ProfessionalType


@pytest.fixture(scope='session')
def app(tmp_path_factory):
    """Create application for testing"""
    os.environ['SECRET_KEY'] = 'test-secret-key'

    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path_factory.mktemp('uploads'))

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def sample_plan():
    """Generator output with two action items"""
    return GeneratedPlan(
        summary="You have a medical appointment on March 5th. Bring an ID.",
        action_plan=[
            ActionItem(
                step="Attend the appointment",
                description="Go to the clinic on March 5th.",
                priority=Priority.HIGH,
                professional_type=ProfessionalType.MEDICAL_INTERPRETER,
            ),
            ActionItem(
                step="Bring identification",
                description="Take a photo ID with you.",
                priority=Priority.MEDIUM,
            ),
        ],
    )
