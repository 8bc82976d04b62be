# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Input validators for use with Prompt Toolkit and interactive Argot prompts.

Included Validators:
- yes_no_validator: Restricts input to 'Y' or 'N'.
"""
from prompt_toolkit.validation import Validator


def yes_no_validator() -> Validator:
    """Validator for yes/no inputs."""

    def validate(text: str) -> bool:
        if text.upper() not in ["Y", "N"]:
            return False
        return True

    return Validator.from_callable(validate, error_message="Enter 'Y' or 'n'.")
