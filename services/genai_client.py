from functools import lru_cache
import os
from typing import Optional
from google import genai
from google.genai import types

from exceptions.custom_exceptions import OracleInvocationError


@lru_cache(maxsize=1)
def get_client() -> genai.Client:
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        # Raised per call, never cached, so setting the key later works
        raise OracleInvocationError("GEMINI_API_KEY is not configured")
    return genai.Client(api_key=api_key)


async def generate_structured_content(
    prompt: str,
    response_schema: types.Schema,
    system_instruction: str,
    temperature: float,
    model: str = "gemini-2.5-flash",
) -> Optional[str]:
    """
    Single JSON-mode completion. Returns the raw response text, which may be
    None or empty when the model produced no candidates.
    """
    client = get_client()

    response = await client.aio.models.generate_content(
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=response_schema,
            temperature=temperature,
        ),
    )

    if not response:
        return None
    return response.text
