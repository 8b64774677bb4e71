"""Centralized styles for the application."""

from cbt_app.core.services.exam_session import QuestionMapStatus

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BACKGROUND_CARD.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QLineEdit, QComboBox, QListWidget {{
                background-color: {ColorPalette.BACKGROUND_CARD.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_header_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"background-color: {ColorPalette.HEADER_BG.get(theme)};"
            f" color: {ColorPalette.HEADER_TEXT.get(theme)};"
        )

    @staticmethod
    def get_timer_style(is_low: bool, theme: Theme = Theme.LIGHT) -> str:
        background = ColorPalette.TIMER_LOW_BG if is_low else ColorPalette.TIMER_BG
        return (
            f"background-color: {background.get(theme)}; color: {ColorPalette.HEADER_TEXT.get(theme)};"
            " font-family: monospace; font-size: 18pt; font-weight: bold;"
            " padding: 4px 12px; border-radius: 6px;"
        )

    @staticmethod
    def get_submit_button_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"background-color: {ColorPalette.SUBMIT_BG.get(theme)}; color: #FFFFFF;"
            " font-weight: bold; padding: 6px 18px; border: none;"
        )

    @staticmethod
    def get_map_button_style(status: QuestionMapStatus, theme: Theme = Theme.LIGHT) -> str:
        if status is QuestionMapStatus.CURRENT:
            return f"background-color: {ColorPalette.MAP_CURRENT.get(theme)}; color: #FFFFFF; font-weight: bold;"
        if status is QuestionMapStatus.ANSWERED:
            return f"background-color: {ColorPalette.MAP_ANSWERED.get(theme)}; color: #FFFFFF; font-weight: bold;"
        return (
            f"background-color: {ColorPalette.BACKGROUND_CARD.get(theme)};"
            f" color: {ColorPalette.MAP_UNANSWERED_TEXT.get(theme)}; font-weight: bold;"
        )

    @staticmethod
    def get_option_button_style(selected: bool, theme: Theme = Theme.LIGHT) -> str:
        base = "text-align: left; padding: 12px; font-size: 13pt; border-radius: 8px;"
        if selected:
            return (
                base
                + f" background-color: {ColorPalette.OPTION_SELECTED_BG.get(theme)};"
                + f" border: 2px solid {ColorPalette.OPTION_SELECTED_BORDER.get(theme)};"
            )
        return base + f" border: 2px solid {ColorPalette.BORDER_PRIMARY.get(theme)};"

    @staticmethod
    def get_verdict_style(passed: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.PASSED if passed else ColorPalette.FAILED
        return f"color: {color.get(theme)}; font-weight: bold;"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
