from .application_form import (
    ACCEPTED_CV_TYPES,
    APPLICATION_FORM,
    APPLICATION_FORM_SCHEMA_PATH,
    build_application_form,
)

__all__ = [
    "ACCEPTED_CV_TYPES",
    "APPLICATION_FORM",
    "APPLICATION_FORM_SCHEMA_PATH",
    "build_application_form",
]
