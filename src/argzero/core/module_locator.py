"""
Extension module discovery.

Finds files matching the scan pattern in the configured folders and loads
them as modules. Load failures are logged and skipped.
"""

import importlib.util
import sys
import threading
from pathlib import Path
from types import ModuleType
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..utils.error_handling import ModuleLoadError, handle_module_operation
from ..utils.logging import get_logger


DEFAULT_SCAN_PATTERN = "*_arg0.py"


class ModuleLocator:
    """Loads extension modules from directories."""

    def __init__(self, directories: Optional[Iterable[Union[str, Path]]] = None,
                 pattern: str = DEFAULT_SCAN_PATTERN):
        self.directories: List[Path] = [Path(d) for d in (directories or ["."])]
        self.pattern = pattern
        self.logger = get_logger(__name__)
        self._loaded: Dict[Path, ModuleType] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config) -> 'ModuleLocator':
        """Create a locator from an ArgZeroConfig."""
        return cls(config.discovery.module_folders, config.discovery.scan_pattern)

    @property
    def loaded_modules(self) -> List[ModuleType]:
        return list(self._loaded.values())

    def find_modules(self, directories: Optional[Iterable[Union[str, Path]]] = None,
                     pattern: Optional[str] = None) -> Iterator[ModuleType]:
        """Lazily yield every module that loads successfully.

        Args:
            directories: Folders to scan (defaults to the locator's folders)
            pattern: File glob (defaults to the locator's pattern)
        """
        folders = [Path(d) for d in directories] if directories is not None else self.directories
        glob = pattern or self.pattern

        for folder in folders:
            for path in self._matching_files(folder, glob):
                try:
                    module = self.load_module(path)
                except ModuleLoadError as e:
                    self.logger.warning(f"Error loading module {path}: {e.details.get('original_error', e)}")
                    continue

                yield module

    def _matching_files(self, folder: Path, pattern: str) -> List[Path]:
        try:
            if not folder.is_dir():
                self.logger.debug(f"Module folder does not exist: {folder}")
                return []
            return sorted(p for p in folder.glob(pattern) if p.is_file())
        except OSError as e:
            self.logger.debug(f"Cannot enumerate module folder {folder}: {e}")
            return []

    @handle_module_operation("module_load")
    def load_module(self, path: Union[str, Path]) -> ModuleType:
        """Load a single file as a module, reusing it if already loaded."""
        resolved = Path(path).resolve()

        with self._lock:
            cached = self._loaded.get(resolved)
            if cached is not None:
                return cached

            module_name = self._module_name_for(resolved)
            if module_name in sys.modules:
                # Same file already imported elsewhere in the process
                self._loaded[resolved] = sys.modules[module_name]
                return sys.modules[module_name]

            spec = importlib.util.spec_from_file_location(module_name, resolved)
            if spec is None or spec.loader is None:
                raise ModuleLoadError(f"No loader available for {resolved}",
                                      details={"path": str(resolved), "original_error": "no loader"})

            module = importlib.util.module_from_spec(spec)
            # Registered first so classes defined in the module resolve by name
            sys.modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except SystemExit as e:
                sys.modules.pop(module_name, None)
                raise ModuleLoadError(
                    f"Module {resolved} exited while loading (code {e.code})",
                    details={"error_type": "exit", "path": str(path), "original_error": f"SystemExit({e.code!r})"}
                ) from e
            except BaseException:
                sys.modules.pop(module_name, None)
                raise

            self._loaded[resolved] = module
            self.logger.debug(f"Loaded module {module_name} from {resolved}")
            return module

    def _module_name_for(self, path: Path) -> str:
        """Use the file stem, suffixed when an unrelated module already holds it."""
        base = path.stem.replace("-", "_").replace(".", "_")
        name = base
        counter = 1
        while name in sys.modules:
            existing = getattr(sys.modules[name], "__file__", None)
            if existing and Path(existing).resolve() == path:
                break
            counter += 1
            name = f"{base}_{counter}"
        return name
