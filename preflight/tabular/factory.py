from preflight.config.settings import Settings
from preflight.tabular.base import BaseSpreadsheetReader
from preflight.tabular.openpyxl_adapter import OpenpyxlSpreadsheetReader

DISABLED = "disabled"


class SpreadsheetReaderFactory:
    """Creates the spreadsheet reader named in settings, or None when disabled."""

    ADAPTERS: dict[str, type[BaseSpreadsheetReader]] = {
        "openpyxl": OpenpyxlSpreadsheetReader,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseSpreadsheetReader | None:
        engine = settings.spreadsheet_engine.lower()
        if engine == DISABLED:
            return None
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown spreadsheet engine '{engine}'. "
                f"Choose from: {[*cls.ADAPTERS, DISABLED]}"
            )
        return adapter_cls()
