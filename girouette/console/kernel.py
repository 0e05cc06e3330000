"""
Console Kernel
Dispatches `girouette <command>` to the registered commands
"""
import asyncio
import sys
import traceback
from typing import Dict, List, Optional

from girouette.console.command import Command
from girouette.console.commands import RouteListCommand
from girouette.logging import LoggerConfig


class Kernel:

    COMMANDS = [RouteListCommand]

    def __init__(self):
        self.commands: Dict[str, Command] = {}
        for command_class in self.COMMANDS:
            command = command_class()
            self.commands[command.name] = command

    def show_help(self):
        print("girouette - declarative controller routing")
        print()
        for name, command in sorted(self.commands.items()):
            print(f"  {command.signature:<40} {command.description}")

    async def run(self, argv: List[str]) -> int:
        if len(argv) < 2 or argv[1] in ['help', '--help', '-h']:
            self.show_help()
            return 0

        command_name = argv[1]
        if command_name not in self.commands:
            print(f"❌ Unknown command: {command_name}\n")
            self.show_help()
            return 1

        LoggerConfig.configure_from_config()
        args, kwargs = self._parse_args(argv[2:])

        try:
            exit_code = await self.commands[command_name].handle(*args, **kwargs)
        except KeyboardInterrupt:
            print("\n\n⚠ Command interrupted by user")
            return 130
        except Exception as e:
            print(f"\n❌ Error executing command: {e}\n")
            traceback.print_exc()
            return 1

        return exit_code if exit_code is not None else 0

    @staticmethod
    def _parse_args(argv: List[str]):
        """
        Parse command line arguments
        Returns tuple of (positional_args, keyword_args)
        """
        args = []
        kwargs = {}

        for arg in argv:
            if arg.startswith('--'):
                if '=' in arg:
                    key, value = arg[2:].split('=', 1)
                    kwargs[key] = value
                else:
                    kwargs[arg[2:]] = True
            elif arg.startswith('-'):
                kwargs[arg[1:]] = True
            else:
                args.append(arg)

        return args, kwargs


def main(argv: Optional[List[str]] = None):
    """Console script entry point"""
    exit_code = asyncio.run(Kernel().run(argv if argv is not None else sys.argv))
    sys.exit(exit_code)
