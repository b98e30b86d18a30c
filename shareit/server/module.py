from pathlib import Path

from shareit.types.module import Module
from shareit.utils.tools import load_modules

module_list: list[Module] = load_modules(
    modules_dir=Path(__file__).parent / "modules",
    package="shareit.server.modules",
)
