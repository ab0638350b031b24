import os


class OptimizationConfig:
    # ===== MODEL =====
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    # Low temperature keeps repeated runs on near-identical data consistent
    TEMPERATURE: float = 0.2

    # ===== PROMPTS =====
    SYSTEM_PROMPT: str = "optimization/budget_allocation_system.txt"
    USER_PROMPT: str = "optimization/budget_allocation_prompt.txt"

    # ===== SESSION =====
    ERROR_MESSAGE: str = "Failed to generate insights. Ensure API Key is valid."
