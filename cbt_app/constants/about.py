"""Static metadata describing ExamQt."""

APP_NAME = "ExamQt"
APP_VERSION = "0.1.0"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "ExamQt is a computer-based testing client built with Qt and FastAPI. "
    "Students take timed exams composed from a shared question bank; graded results "
    "can be reviewed from the desktop or over the local results API."
)

HELP_TEXT = (
    "Question banks are plain .txt files, one question per block:\n\n"
    "Q: What is 2 + 2?\n"
    "A: 3\nB: 4\nC: 5\nD: 6\n"
    "ANSWER: B\nSUBJECT: Mathematics\nDIFFICULTY: Easy\n\n"
    "Q: The past tense of 'go' is ____.\n"
    "ANSWER: went\nSUBJECT: English\nTYPE: FILL_GAP"
)
