import re
import bleach
from fastapi import HTTPException, status

MAX_PROMPT_CHARS = 2000
SAFE_TEXT_PATTERNS = re.compile(r"^[\s\S]{0,%d}$" % MAX_PROMPT_CHARS)


def sanitize_input(text: str) -> str:
    # input size validation
    if not SAFE_TEXT_PATTERNS.match(text or ""):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Invalid Input Size.'
        )
    # remove script tags and URIs
    text = re.sub(r"(?i)<\s*script.*?>.*?<\s*/\s*script\s*>", "", text or "", flags=re.DOTALL)
    text = re.sub(r"(?i)javascript:", "", text)

    return bleach.clean(text, tags=[], strip=True).strip()
