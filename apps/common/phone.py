import phonenumbers
from django.conf import settings


def to_e164(raw: str, default_region: str | None = None) -> str:
    region = default_region or getattr(settings, "PHONE_DEFAULT_REGION", "TH")
    try:
        n = phonenumbers.parse(raw, region)
    except phonenumbers.NumberParseException:
        raise ValueError("Invalid phone number")
    if not phonenumbers.is_valid_number(n):
        raise ValueError("Invalid phone number")
    return phonenumbers.format_number(n, phonenumbers.PhoneNumberFormat.E164)
