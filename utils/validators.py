"""
Input validation utilities.

Maps user-facing choices to engine values.
"""

from typing import Optional

from database.models import Gender

_GENDER_CHOICES = {
    "boy": Gender.MALE,
    "male": Gender.MALE,
    "پسر": Gender.MALE,
    "girl": Gender.FEMALE,
    "female": Gender.FEMALE,
    "دختر": Gender.FEMALE,
}


def parse_requested_gender(text: Optional[str]) -> Optional[Gender]:
    """
    Parse the requested partner gender from a button label.

    Args:
        text: Message text, e.g. "Boy" or "Girl"

    Returns:
        Gender or None if the text is not a valid choice
    """
    if not text:
        return None
    return _GENDER_CHOICES.get(text.strip().lower())
