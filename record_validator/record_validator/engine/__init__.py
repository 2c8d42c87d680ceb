from .array_validator import ArrayValidator
from .chain import run_chain
from .validator import Validator, default_validator, validate

__all__ = ["ArrayValidator", "Validator", "default_validator", "run_chain", "validate"]
