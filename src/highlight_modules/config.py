import os

from pydantic import BaseModel

DEFAULT_DATASET_NAME = "highlights.json"
MANIFEST_NAME = "modules.json"
DEFAULT_EXPORT_PATH = "exported_layer"

SINGLE_FOLDER_ENV = "HIGHLIGHT_MODULES_SINGLE_FOLDER"
EXPORT_PATH_ENV = "HIGHLIGHT_MODULES_EXPORT_PATH"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


class ExportSettings(BaseModel):
    export_to_single_folder: bool = False
    export_path: str = DEFAULT_EXPORT_PATH

    @classmethod
    def from_env(cls) -> "ExportSettings":
        return cls(
            export_to_single_folder=_env_flag(SINGLE_FOLDER_ENV, False),
            export_path=os.getenv(EXPORT_PATH_ENV) or DEFAULT_EXPORT_PATH,
        )
