import logging
import os

from chatmux.mux import ErrorTexts, Mux, Options

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _as_bool(value, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    logger.warning("Unrecognised boolean value %r; using %s", value, default)
    return default


class Settings:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("chatmux", {})
        discord_cfg = cfg.get("discord", {})
        options_cfg = cfg.get("options", {})
        errors_cfg = cfg.get("errors", {})

        token_env = str(discord_cfg.get("token_env", "DISCORD_API_TOKEN"))
        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)

        self.PREFIX: str = str(cfg.get("prefix", os.getenv("CHATMUX_PREFIX", "!")))
        self.FUZZY: bool = _as_bool(cfg.get("fuzzy", os.getenv("CHATMUX_FUZZY")), False)
        self.LOG_LEVEL: str = str(cfg.get("log_level", os.getenv("CHATMUX_LOG_LEVEL", "INFO"))).upper()

        self.OPTIONS = Options(
            ignore_bots=_as_bool(options_cfg.get("ignore_bots", os.getenv("CHATMUX_IGNORE_BOTS")), True),
            ignore_dms=_as_bool(options_cfg.get("ignore_dms", os.getenv("CHATMUX_IGNORE_DMS")), True),
            ignore_empty=_as_bool(options_cfg.get("ignore_empty", os.getenv("CHATMUX_IGNORE_EMPTY")), True),
            ignore_non_default=_as_bool(
                options_cfg.get("ignore_non_default", os.getenv("CHATMUX_IGNORE_NON_DEFAULT")), True
            ),
        )

        defaults = ErrorTexts()
        self.ERROR_TEXTS = ErrorTexts(
            command_not_found=str(errors_cfg.get("command_not_found", defaults.command_not_found)),
            no_permissions=str(errors_cfg.get("no_permissions", defaults.no_permissions)),
            platform_error=str(errors_cfg.get("platform_error", defaults.platform_error)),
        )

    def build_mux(self) -> Mux:
        """Create a :class:`Mux` in its setup phase from these settings."""

        mux = Mux(self.PREFIX, options=self.OPTIONS, error_texts=self.ERROR_TEXTS)
        if self.FUZZY:
            mux.enable_fuzzy()
        return mux
