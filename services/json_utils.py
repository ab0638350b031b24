import re

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", flags=re.DOTALL)


def strip_code_fences(raw_output: str) -> str:
    """Remove markdown code fences some models wrap around JSON."""
    return _CODE_FENCE.sub("", raw_output.strip())
