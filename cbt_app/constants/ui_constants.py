"""Qt UI constants used across widgets."""

PORTAL_WINDOW_TITLE: str = "ExamQt Student Portal"
EXAM_WINDOW_TITLE_TEMPLATE: str = "ExamQt - {title}"

PORTAL_STUDENT_LABEL: str = "Candidate:"
PORTAL_AVAILABLE_TITLE: str = "Available Exams"
PORTAL_COMPLETED_TITLE: str = "Exam History"
PORTAL_START_BUTTON: str = "Start Exam"
PORTAL_IMPORT_BUTTON: str = "Import Question Bank"
PORTAL_NO_EXAMS: str = "No exams available right now."
PORTAL_NO_RESULTS: str = "No completed exams yet."

IMPORT_DIALOG_TITLE: str = "Select question bank file"
IMPORT_FILE_FILTER: str = "Question banks (*.txt);;All files (*.*)"

EXAM_SUBMIT_BUTTON: str = "SUBMIT (S)"
EXAM_PREV_BUTTON: str = "PREVIOUS (P)"
EXAM_NEXT_BUTTON: str = "NEXT (N)"
EXAM_FILL_GAP_PLACEHOLDER: str = "Type your answer and press Enter"
EXAM_KEY_HINT: str = "Select: A-D  •  Nav: P/N  •  Help: F1"
SIDEBAR_TITLE: str = "Subject Navigation"

SUBMIT_CONFIRM_TITLE: str = "Confirm Submission"
SUBMIT_CONFIRM_TEMPLATE: str = (
    "Unanswered Questions: {unanswered}\n"
    "Time remaining: {time_remaining}\n\n"
    "Are you sure you want to finish?"
)
MANUAL_SUBMIT_MESSAGE: str = "Exam Submitted Successfully!"
AUTO_SUBMIT_MESSAGE: str = "Time is up! Exam submitted automatically."
SHORTCUT_HELP_TITLE: str = "Keyboard Controls"
