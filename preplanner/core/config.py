"""
Application configuration loader and it handles:
- Environment variables
- Completion service settings
- Step execution limits
- Project store configuration

And, the main purpose:
Central place for system configuration.
"""


from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./preplanner.db"

    # LLM
    LLM_PROVIDER: str = "chat"  # chat | assistant | mock (for no-key dev)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.2
    LLM_TIMEOUT: float = 60.0

    # Assistant (thread/run/poll) strategy
    OPENAI_ASSISTANT_ID: str = ""
    RUN_POLL_INTERVAL: float = 1.0
    RUN_POLL_MAX_ATTEMPTS: int = 60

    # Step execution
    GUARD_WORD: str = "Ok WDI Code Now"
    MAX_LINES: int = 600
    MAX_PLAN_STEPS: int = 10

    # Projects
    ACCEPTED_TECH: str = "react_ts"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
