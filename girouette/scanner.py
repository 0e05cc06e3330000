"""
Controller Scanner
Walks a controllers directory and loads every controller file it finds
"""
import asyncio
import importlib.util
import itertools
import os
import re
import sys
from typing import Awaitable, Callable, List, Optional, Pattern, Tuple, Union

from girouette.defaults import (
    DEFAULT_CONTROLLER_EXPORT,
    DEFAULT_CONTROLLER_MODULE_PREFIX,
    DEFAULT_CONTROLLER_SUFFIX,
    DEFAULT_IGNORED_DIRECTORIES,
)
from girouette.exceptions import DiscoveryError, LoadError
from girouette.logging import getLogger
from girouette.support import Str

logger = getLogger(__name__)

ControllerCallback = Callable[[type, str], Union[None, Awaitable[None]]]

# Every scan gets its own module namespace so rescans load fresh classes
_scan_counter = itertools.count(1)


class ControllerScanner:
    """
    Recursive controller discovery

    Files are selected by the default suffix rule ('*_controller.py') or by
    an override regex searched in the file name. Subdirectories are visited
    before the files next to them. A file that fails to load, or whose
    callback raises, is logged and skipped.

    Usage:
        scanner = ControllerScanner('app/controllers')
        controllers = await scanner.scan(lambda controller, path: engine.register(controller, path))
    """

    def __init__(self, root: str, pattern: Optional[Union[str, Pattern]] = None):
        self.root = os.path.abspath(root)
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self._module_prefix = f"{DEFAULT_CONTROLLER_MODULE_PREFIX}_{next(_scan_counter)}"

    # =========================================================================
    # Discovery
    # =========================================================================

    async def scan(self, on_controller: Optional[ControllerCallback] = None) -> List[Tuple[str, type]]:
        """
        Load every controller under the root

        Args:
            on_controller: Called with (controller, path) for each loaded file

        Returns:
            (path, controller) pairs for the files that loaded and registered

        Raises:
            DiscoveryError: If the root directory is missing or unreadable
        """
        if not os.path.isdir(self.root):
            raise DiscoveryError(f"Controllers directory not found: {self.root}", path=self.root)

        found: List[Tuple[str, type]] = []
        try:
            await self._scan_directory(self.root, on_controller, found)
        finally:
            self.release_modules()

        logger.debug(
            f"Scanned {len(found)} controllers",
            extra={'root': self.root, 'controllers': len(found)},
        )
        return found

    async def _scan_directory(self, directory: str, on_controller, found: List[Tuple[str, type]]):
        try:
            entries = await asyncio.to_thread(self._list_directory, directory)
        except OSError as e:
            if directory == self.root:
                raise DiscoveryError(f"Controllers directory cannot be read: {e}", path=directory) from e
            logger.error(f"Skipping unreadable directory {directory}: {e}")
            return

        directories = [entry for entry in entries if entry.is_dir() and not self._is_ignored(entry.name)]
        files = [entry for entry in entries if entry.is_file() and self.is_controller_file(entry.name)]

        for entry in directories:
            await self._scan_directory(entry.path, on_controller, found)

        for entry in files:
            controller = await self._process_file(entry.path, on_controller)
            if controller is not None:
                found.append((entry.path, controller))

    async def _process_file(self, path: str, on_controller) -> Optional[type]:
        try:
            controller = await self.load_controller(path)
            if on_controller is not None:
                result = on_controller(controller, path)
                if asyncio.iscoroutine(result):
                    await result
            return controller
        except Exception as e:
            error = e if isinstance(e, LoadError) else LoadError(f"{path}: {e}", path=path)
            logger.error(f"Failed to load controller {path}: {error.message}", exc_info=e)
            return None

    @staticmethod
    def _list_directory(directory: str) -> List[os.DirEntry]:
        with os.scandir(directory) as iterator:
            return list(iterator)

    @staticmethod
    def _is_ignored(name: str) -> bool:
        return name.startswith('.') or name in DEFAULT_IGNORED_DIRECTORIES

    def is_controller_file(self, filename: str) -> bool:
        """
        Check a file name against the override regex, or the default suffix

        Example:
            ControllerScanner('app').is_controller_file('posts_controller.py')  # True
            ControllerScanner('app', r'_controller_domain\\.py$').is_controller_file('posts_controller.py')  # False
        """
        if self.pattern is not None:
            return self.pattern.search(filename) is not None
        return filename.endswith(DEFAULT_CONTROLLER_SUFFIX)

    # =========================================================================
    # Loading
    # =========================================================================

    def module_name_for(self, path: str) -> str:
        """
        Synthetic module name derived from the path relative to the root

        Example:
            # root 'app', path 'app/admin/posts_controller.py'
            'girouette_controllers_1.admin.posts_controller'
        """
        relative = os.path.splitext(os.path.relpath(path, self.root))[0]
        parts = [re.sub(r'\W', '_', part) for part in relative.split(os.sep)]
        return '.'.join([self._module_prefix, *parts])

    async def load_controller(self, path: str) -> type:
        """
        Import a controller file and return its default export

        Raises:
            LoadError: If the file cannot be imported or exports no controller
        """
        module = await asyncio.to_thread(self._import_module, path)
        return self.default_export(module, path)

    def _import_module(self, path: str):
        module_name = self.module_name_for(path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise LoadError(f"Cannot create an import spec for {path}", path=path)

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        return module

    def release_modules(self):
        """
        Drop this scan's synthetic modules from sys.modules

        The loaded controller classes stay usable; only the import cache
        entries go, so repeated scans do not accumulate them.
        """
        stale = [
            name for name in sys.modules
            if name == self._module_prefix or name.startswith(f"{self._module_prefix}.")
        ]
        for name in stale:
            del sys.modules[name]

    @staticmethod
    def default_export(module, path: str) -> type:
        """The module's __controller__, else the class named after the file"""
        controller = getattr(module, DEFAULT_CONTROLLER_EXPORT, None)
        if controller is None:
            stem = os.path.basename(path).split('.')[0]
            controller = getattr(module, Str.studly(stem), None)

        if not isinstance(controller, type):
            raise LoadError(f"{path} does not export a controller class", path=path)

        return controller
