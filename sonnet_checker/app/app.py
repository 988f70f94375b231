"""Application wiring for the sonnet checker."""

from __future__ import annotations

from typing import Callable, Mapping, Optional, Tuple

from sonnet_checker.config import SETTINGS, Settings
from sonnet_checker.core import (
    AnalysisOptions,
    JsonFileOverlayPort,
    InMemoryOverlayPort,
    PhoneticAnalyzer,
    PronunciationStore,
    SonnetAnalysis,
    SonnetAnalyzer,
    load_pronouncing_table,
    load_table_json,
)
from sonnet_checker.core.phonemes import PhonemeSequence
from sonnet_checker.utils.logging_config import configure_logging
from sonnet_checker.utils.observability import get_logger

from .services.report_formatter import SonnetReportFormatter
from .ui.gradio import create_interface

TableLoader = Callable[[], Mapping[str, Tuple[PhonemeSequence, ...]]]


def default_table_loader(settings: Settings) -> TableLoader:
    """Choose the base-table source configured by ``settings``."""

    if settings.dict_path:
        path = settings.dict_path
        return lambda: load_table_json(path)
    return load_pronouncing_table


class SonnetCheckerApp:
    """High-level facade bundling the store, analyzers and formatter."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        store: Optional[PronunciationStore] = None,
        table_loader: Optional[TableLoader] = None,
        formatter: Optional[SonnetReportFormatter] = None,
    ) -> None:
        self.settings = settings or SETTINGS
        self._logger = get_logger(__name__).bind(component="app_facade")

        if store is None:
            port = (
                JsonFileOverlayPort(self.settings.overlay_path)
                if self.settings.overlay_path
                else InMemoryOverlayPort()
            )
            store = PronunciationStore(port=port)
            loader = table_loader or default_table_loader(self.settings)
            try:
                store.swap_base(loader())
                store.load_overlay()
            except Exception as exc:
                self._logger.error(
                    "Pronunciation table initialisation failed",
                    context={"dict_path": self.settings.dict_path, "error": str(exc)},
                )
                raise

        self.store = store
        self.phonetic_analyzer = PhoneticAnalyzer(self.store)
        self.sonnet_analyzer = SonnetAnalyzer(self.phonetic_analyzer)
        self.formatter = formatter or SonnetReportFormatter()

        self._logger.info(
            "Application dependencies wired",
            context={
                "words": len(self.store),
                "overlay_path": self.settings.overlay_path,
                "default_form": self.settings.default_form,
            },
        )

    # Public API ------------------------------------------------------------
    def analyze(
        self,
        text: str,
        form: Optional[str] = None,
        *,
        strict: Optional[bool] = None,
    ) -> SonnetAnalysis:
        options = AnalysisOptions(strict=self.settings.strict if strict is None else strict)
        return self.sonnet_analyzer.analyze_sonnet(
            text, form or self.settings.default_form, options
        )

    def analyze_to_markdown(
        self,
        text: str,
        form: Optional[str] = None,
        *,
        strict: Optional[bool] = None,
    ) -> str:
        return self.formatter.format_report(self.analyze(text, form, strict=strict))

    def add_pronunciation(self, word: str, phonemes: str) -> PhonemeSequence:
        """Add a user pronunciation given as ``"HH AH0 L OW1"``."""

        return self.store.add_overlay(word, phonemes.replace(",", " ").split())

    def create_gradio_interface(self):
        return create_interface(self)


def main() -> None:
    configure_logging(SETTINGS.log_level)
    app = SonnetCheckerApp()
    interface = app.create_gradio_interface()
    interface.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=SETTINGS.share,
    )


__all__ = ["SonnetCheckerApp", "default_table_loader", "main"]
