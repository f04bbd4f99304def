"""Closed vocabularies shared by models and schemas."""

import enum


class CallType(str, enum.Enum):
    """Category a reviewer or the AI assigns to a call."""

    APPOINTMENT_ADJUSTMENT = "APPOINTMENT_ADJUSTMENT"
    NEW_CLIENT_SPANISH = "NEW_CLIENT_SPANISH"
    GENERAL_INQUIRY = "GENERAL_INQUIRY"
    GENERAL_INQUIRY_TRANSFER = "GENERAL_INQUIRY_TRANSFER"
    TIME_SENSITIVE = "TIME_SENSITIVE"
    NEW_CLIENT_ENGLISH = "NEW_CLIENT_ENGLISH"
    LOOKING_FOR_SOMEONE = "LOOKING_FOR_SOMEONE"
    MISSED_CALL = "MISSED_CALL"
    MISCALANEOUS = "MISCALANEOUS"  # stored spelling from the calling platform
    BILLING = "BILLING"


# Tags a human reviewer may attach to an evaluation
HUMAN_EVALUATION_TAGS = (
    "Polite",
    "Professional",
    "Helpful",
    "Clear",
    "Empathetic",
    "Knowledgeable",
)
