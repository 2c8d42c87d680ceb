import copy

import pytest

from record_validator.forms import APPLICATION_FORM
from record_validator.models.record import FileDescriptor


PDF = FileDescriptor(name="cv.pdf", type="application/pdf", size=48213)
PNG = FileDescriptor(name="cv.png", type="image/png", size=1024)


@pytest.fixture
def application_schema():
    return APPLICATION_FORM


@pytest.fixture
def valid_application():
    record = {
        "firstName": "Asha",
        "lastName": "Rao",
        "dob": "1990-04-12",
        "email": "asha.rao@example.com",
        "projects": [
            {"projectName": "Atlas", "projectDescription": "Route planning service"},
        ],
        "cvType": "online",
        "websiteLink": "https://asha.example.com/cv",
        "mobileNumber": "9876543210",
        "profilePhoto": "asha.png",
        "experience": 5,
        "skills": ["python", "sql"],
        "aboutMe": "Backend engineer.",
        "agreeTerms": True,
    }
    return copy.deepcopy(record)


@pytest.fixture
def pdf_file():
    return PDF


@pytest.fixture
def png_file():
    return PNG
