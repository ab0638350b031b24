import os
from functools import lru_cache

PROMPTS_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "prompts"
)


@lru_cache(maxsize=None)
def load_prompt(prompt_name: str) -> str:
    prompt_path = os.path.join(PROMPTS_DIR, prompt_name)
    with open(prompt_path, "r", encoding="utf-8") as f:
        return f.read().strip()


def render_prompt(prompt_name: str, **values) -> str:
    """Load a prompt template and fill its str.format placeholders."""
    return load_prompt(prompt_name).format(**values)
