"""Configuration model for the mailkit-email converter.

Provides ``EmailConfig`` with the converter's tunable parameters and
defaults.  Supports loading overrides from YAML or JSON files via the
``from_file()`` classmethod.
"""

from __future__ import annotations

import json
import pathlib

from pydantic import BaseModel, ConfigDict


class EmailConfig(BaseModel):
    """Converter settings.

    The Message-ID size is fixed at 16 random bytes and is not a setting.
    """

    model_config = ConfigDict(extra="forbid")

    # --- Logging / PII Safety ---
    log_sample_data: bool = False

    @classmethod
    def from_file(cls, path: str) -> EmailConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Keys present in the file override the defaults;
        unknown keys are rejected.

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        ValueError
            If the extension is unsupported.
        pydantic.ValidationError
            If the file holds unknown keys or invalid values.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()
        if suffix in (".yaml", ".yml"):
            import yaml  # type: ignore[import-untyped]

            data = yaml.safe_load(file_path.read_text())
        elif suffix == ".json":
            data = json.loads(file_path.read_text())
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        return cls.model_validate(data or {})
