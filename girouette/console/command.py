"""
Base Command Class
Base class for girouette console commands
"""
from abc import ABC, abstractmethod
from typing import Optional


class Command(ABC):

    # Command name (e.g., "route:list")
    name: str = ""

    # Command description
    description: str = ""

    # Command signature (for help display)
    signature: Optional[str] = None

    def __init__(self):
        if not self.signature:
            self.signature = self.name

    @abstractmethod
    async def handle(self, *args, **kwargs):
        """
        Execute the command logic

        Returns:
            int: Exit code (0 for success, non-zero for error)
        """
        pass

    # Output helpers
    def info(self, message: str):
        print(f"ℹ {message}")

    def success(self, message: str):
        print(f"✅ {message}")

    def error(self, message: str):
        print(f"❌ {message}")

    def warning(self, message: str):
        print(f"⚠ {message}")

    def line(self, message: str = ""):
        print(message)

    @staticmethod
    def truncate(text: str, max_len: int) -> str:
        """Truncate text to max length with ellipsis"""
        if len(text) <= max_len:
            return text
        return text[:max_len - 3] + '...'

    def table(self, headers: list, rows: list, max_widths: Optional[list] = None):
        """Print a boxed table"""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(str(cell)))

        if max_widths:
            widths = [min(width, limit) for width, limit in zip(widths, max_widths)]

        separator = '+-' + '-+-'.join('-' * width for width in widths) + '-+'

        def render(cells):
            return '| ' + ' | '.join(
                self.truncate(str(cell), widths[i]).ljust(widths[i]) for i, cell in enumerate(cells)
            ) + ' |'

        self.line(separator)
        self.line(render(headers))
        self.line(separator)
        for row in rows:
            self.line(render(row))
        self.line(separator)
