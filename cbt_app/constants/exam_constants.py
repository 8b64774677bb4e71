"""Exam-related constants shared across UI and core layers."""

DEFAULT_DURATION_MINUTES: int = 60
TICK_INTERVAL_MS: int = 1000
TIME_WARNING_THRESHOLD_SECONDS: int = 300
DEFAULT_BLUEPRINT_COUNT: int = 5
DEFAULT_QUESTION_BANK_PATH: str = "cbt_app/data/question_bank.txt"
