"""Review session: the selection a front end edits before analyzing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ai_code_reviewer.core.language_detection import resolve_upload_language
from ai_code_reviewer.models.language import DEFAULT_LANGUAGE, Language

if TYPE_CHECKING:
    from ai_code_reviewer.core.controller import AnalysisController
    from ai_code_reviewer.models.state import RequestState


class ReviewSession:
    """Holds the current code and language and runs analyses on them.

    Example:
        session = ReviewSession(AnalysisController(client))
        session.upload("solution.rs", source)
        state = await session.analyze()
    """

    def __init__(
        self,
        controller: AnalysisController,
        language: Language = DEFAULT_LANGUAGE,
    ) -> None:
        self.controller = controller
        self.language = language
        self.code = ""

    @property
    def state(self) -> RequestState:
        return self.controller.state

    @property
    def can_analyze(self) -> bool:
        """Whether the analyze action should be enabled."""
        return not self.controller.is_busy and bool(self.code.strip())

    def select_language(self, language: Language | str) -> Language:
        """Change the selected language.

        Raises:
            ValueError: If the language is not supported
        """
        self.language = Language.parse(language)
        return self.language

    def set_code(self, code: str) -> None:
        self.code = code

    def upload(self, filename: str, content: str) -> Language:
        """Load file content, inferring the language from its extension.

        Unrecognized extensions keep the current language.

        Returns:
            The language selected after the upload
        """
        self.code = content
        self.language = resolve_upload_language(filename, self.language)
        return self.language

    async def analyze(self) -> RequestState:
        """Analyze the current selection."""
        return await self.controller.analyze(self.language, self.code)
