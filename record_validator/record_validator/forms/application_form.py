# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""Job application form schema.

Personal details, a list of projects, and a CV supplied either as a website
link (``cvType == "online"``) or as an uploaded document (``cvType ==
"offline"``). The same schema ships as ``application_form.schema.yaml``.
"""

from pathlib import Path

from ..builder import array, boolean, file, number, object_schema, string, when
from ..models.specs import SchemaDefinition

APPLICATION_FORM_SCHEMA_PATH = Path(__file__).parent / "application_form.schema.yaml"

ACCEPTED_CV_TYPES = ("application/pdf", "application/msword")

MOBILE_NUMBER_PATTERN = r"^\d{10}$"
PIN_CODE_PATTERN = r"^\d{6}$"


def build_application_form() -> SchemaDefinition:
    return object_schema(
        {
            "firstName": string().required("First Name is required"),
            "lastName": string().required("Last Name is required"),
            "education": string(),
            "dob": string().required("DOB is required"),
            "email": string().email("Invalid email").required("Email is required"),
            "projects": array(
                {
                    "projectName": string().required("Project Name is required"),
                    "projectDescription": string().required("Project Description is required"),
                }
            ).min(1, "At least one project is required"),
            "cvType": string().required("CV Type is required"),
            "websiteLink": when(
                "cvType",
                {"online": string().url("Invalid website link").required("Website Link is required")},
            ),
            "file": when(
                "cvType",
                {"offline": file().mime_types(ACCEPTED_CV_TYPES, "Invalid file format").required("File is required")},
            ),
            "degreeType": array(string()),
            "address": string(),
            "mobileNumber": string()
            .matches(MOBILE_NUMBER_PATTERN, "Invalid mobile number")
            .required("Mobile number is required"),
            "pinCode": string().matches(PIN_CODE_PATTERN, "Invalid pin code"),
            "emergencyNumber": string(),
            "profilePhoto": string().required("Profile Photo is required"),
            "coverPhoto": string(),
            "experience": number().required("Years of experience is required").min(0).max(10),
            "skills": array(string()).required("At least one skill is required"),
            "aboutMe": string()
            .max(250, "Description should be at most 250 characters")
            .required("Description is required"),
            "agreeTerms": boolean().one_of([True], "You must agree to the terms and conditions"),
        },
        name="application_form",
    )


APPLICATION_FORM = build_application_form()
