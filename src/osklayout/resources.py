import importlib.resources
import typing

KEYBOARDS = importlib.resources.files(__package__) / "keyboards"
SUFFIX = ".yaml"


def get_keyboard(name: str) -> typing.Optional[str]:
    # lookups stay inside the keyboards table
    if not name or "/" in name or name.startswith("."):
        return None
    resource = KEYBOARDS / (name + SUFFIX)
    if not resource.is_file():
        return None
    return resource.read_text(encoding="utf-8")


def list_keyboards() -> list[str]:
    return sorted(entry.name.removesuffix(SUFFIX) for entry in KEYBOARDS.iterdir() if entry.name.endswith(SUFFIX))
