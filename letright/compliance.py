"""
Renters' Rights Act 2025 message checks.

Landlord messages are screened for rent bidding (asking for more than the
advertised rent) and for discriminatory phrasing covered by the Equality
Act 2010. Renter messages are never screened.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional


RENT_BIDDING_ERROR = (
    "This message violates the Renters' Rights Act 2025. Landlords cannot "
    "request or accept rent above the advertised price. This is known as "
    "\"rent bidding\" and is illegal."
)
DISCRIMINATION_ERROR = (
    "This message contains phrases that may violate the Equality Act 2010 and "
    "RRA 2025. Discrimination against families or benefit recipients is illegal."
)
REMOVED_MARKER = "[REMOVED - VIOLATES RRA 2025]"

_BENEFITS = r"(dss|benefits|housing\s+benefit|universal\s+credit)"
_FAMILIES = r"(kids|children|families)"

RENT_BIDDING_PATTERNS = [re.compile(p, re.IGNORECASE) for p in (
    # Offers above asking
    r"offer\s+(more|above|higher|extra)",
    r"willing\s+to\s+pay\s+(more|extra|higher)",
    r"can\s+you\s+pay\s+(more|extra|higher)",
    r"increase\s+(your|the)\s+offer",
    r"bid\s+higher",
    r"outbid",
    # Above advertised rent
    r"pay\s+more\s+than\s+£?\d+",
    r"above\s+the\s+(asking|advertised|listed)\s+(rent|price)",
    r"more\s+than\s+(asking|advertised|listed)",
    r"higher\s+than\s+£?\d+",
    r"£\d+\s+(more|extra|additional)\s+(per\s+month|pcm)",
    # Bidding language
    r"best\s+offer",
    r"highest\s+(bidder|offer)",
    r"bidding\s+war",
    r"rent\s+auction",
    # Extra payments
    r"pay\s+£?\d+\s+more",
    r"additional\s+£?\d+",
    r"extra\s+£?\d+\s+(per\s+month|monthly|pcm)",
    # Conditional on higher rent
    r"if\s+you\s+pay\s+(more|extra)",
    r"provided\s+you\s+pay",
    r"only\s+if\s+you\s+(offer|pay)\s+(more|higher)",
)]

# Refusals that would otherwise trip the bidding rules
ALLOWED_PATTERNS = [re.compile(p, re.IGNORECASE) for p in (
    r"no\s+more",
    r"not\s+(willing|able)\s+to\s+pay\s+more",
    r"cannot\s+pay\s+more",
    r"won['’]t\s+pay\s+more",
)]

DISCRIMINATORY_PATTERNS = [re.compile(p, re.IGNORECASE) for p in (
    # Benefits / DSS
    rf"no\s+{_BENEFITS}",
    rf"{_BENEFITS}\s+not\s+accepted",
    rf"(not|do\s+not|don't)\s+accept\s+{_BENEFITS}",
    r"professionals\s+only",
    r"working\s+people\s+only",
    # Families / children
    rf"no\s+{_FAMILIES}",
    rf"{_FAMILIES}\s+not\s+allowed",
    rf"(not|do\s+not|don't)\s+allow\s+{_FAMILIES}",
    r"adults\s+only",
    r"child\s+free",
    r"not\s+suitable\s+for\s+children",
)]

RENT_MENTION = re.compile(r"£(\d{1,5})\s*(per\s+month|pcm|monthly|/month)?", re.IGNORECASE)


@dataclass
class ValidationResult:
    """Outcome of screening one message."""
    is_valid: bool
    error: Optional[str] = None
    banned_phrases: List[str] = field(default_factory=list)


def _matches(patterns, message: str) -> List[str]:
    found = []
    for pattern in patterns:
        m = pattern.search(message)
        if m:
            found.append(m.group(0))
    return found


def validate_message(message, sender_type: str,
                     advertised_rent: Optional[int] = None) -> ValidationResult:
    """
    Screen a chat message for RRA 2025 compliance.

    Args:
        message: Message text
        sender_type: "landlord" or "renter"; only landlords are screened
        advertised_rent: Advertised monthly rent, enables the amount check

    Returns:
        ValidationResult with the offending phrases when invalid
    """
    if sender_type != "landlord":
        return ValidationResult(is_valid=True)

    if not isinstance(message, str) or not message:
        return ValidationResult(is_valid=False, error="Invalid message format")

    if not message.strip():
        return ValidationResult(is_valid=True)

    if any(p.search(message) for p in ALLOWED_PATTERNS):
        return ValidationResult(is_valid=True)

    bidding = _matches(RENT_BIDDING_PATTERNS, message)
    if bidding:
        return ValidationResult(is_valid=False, error=RENT_BIDDING_ERROR, banned_phrases=bidding)

    discriminatory = _matches(DISCRIMINATORY_PATTERNS, message)
    if discriminatory:
        return ValidationResult(is_valid=False, error=DISCRIMINATION_ERROR,
                                banned_phrases=discriminatory)

    if advertised_rent:
        for m in RENT_MENTION.finditer(message):
            amount = int(m.group(1))
            if amount > advertised_rent:
                return ValidationResult(
                    is_valid=False,
                    error=(
                        f"This message mentions £{amount:,}, which is above the advertised "
                        f"rent of £{advertised_rent:,}. Under RRA 2025, landlords cannot "
                        f"request rent above the advertised price."
                    ),
                    banned_phrases=[m.group(0)]
                )

    return ValidationResult(is_valid=True)


def sanitize_message(message: str) -> str:
    """
    Replace rent-bidding phrases with a removal marker.

    Rejecting the message is preferred; this exists for moderation tooling.
    """
    for pattern in RENT_BIDDING_PATTERNS:
        message = pattern.sub(REMOVED_MARKER, message, count=1)
    return message


def validation_error_message(result: ValidationResult) -> str:
    """User-facing explanation for an invalid result, empty when valid."""
    if result.is_valid:
        return ""

    text = result.error or "Message violates RRA 2025 compliance rules."
    if result.banned_phrases:
        text += '\n\nDetected phrases: "' + '", "'.join(result.banned_phrases) + '"'
    text += (
        "\n\nThe Renters' Rights Act 2025 prohibits landlords from requesting or "
        "accepting rent above the advertised price. This practice, known as "
        "\"rent bidding,\" can result in fines up to £7,000."
    )
    return text
