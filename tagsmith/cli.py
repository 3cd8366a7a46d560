#!/usr/bin/env python3
"""
Tagsmith - Audio Tag Editor and Renamer
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Edit tag fields on audio files, fill tags in from filenames (--extract) and
rename files from their tags (--rename, --rename-fs). Without any edit flags
the populated fields of each file are listed.
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .addons.extract import extract_into
from .addons.rename import new_filename, rename_file
from .core.actions import ClearField, SetField, apply_actions, clear_all
from .core.exceptions import ArgumentError, ExtractionMismatch, FileError, InvalidField
from .core.fields import FIELDS, FieldSpec
from .core.metadata import AUDIO_EXTENSIONS, TagFile
from .core.sanitize import SanitizeMode
from .core.template import compile_spec

# Configure logging format
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger('Tagsmith')

# Column at which field values start in the listing
DISPLAY_COLUMN = 10


def parse_field_value(field: FieldSpec, raw: str) -> Any:
    """
    Parse a flag value for a field.

    Args:
        field (FieldSpec): Field the flag sets
        raw (str): Value as given on the command line

    Returns:
        Any: Parsed value (str or int)

    Raises:
        ArgumentError: If an integer field gets a value that is not base-10
    """
    try:
        return field.parse(raw)
    except ValueError as e:
        raise ArgumentError(str(e)) from e


def spec_argument(text: str):
    """
    argparse type for --extract/--rename values.

    Args:
        text (str): Spec text

    Returns:
        CompiledSpec: The compiled spec

    Raises:
        argparse.ArgumentTypeError: If the spec references an unknown field
    """
    try:
        return compile_spec(text)
    except InvalidField as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _action_list(namespace: argparse.Namespace) -> list:
    """
    The shared, ordered list of field actions on the namespace.

    Args:
        namespace (argparse.Namespace): Namespace being filled by argparse

    Returns:
        list: The action list, created on first use
    """
    actions = getattr(namespace, 'actions', None)
    if actions is None:
        actions = []
        setattr(namespace, 'actions', actions)
    return actions


class SetFieldAction(argparse.Action):
    """argparse action recording a SetField for one registry field."""

    def __init__(self, option_strings, dest, field: FieldSpec = None, **kwargs):
        """
        Initialize the action.

        Args:
            option_strings (list): Flag names
            dest (str): Namespace attribute (unused, actions share one list)
            field (FieldSpec): Field this flag sets
            **kwargs: Passed on to argparse.Action
        """
        self.field = field
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """
        Parse the value and queue the assignment.

        Args:
            parser (argparse.ArgumentParser): The parser
            namespace (argparse.Namespace): Namespace being filled
            values (str): The flag value
            option_string (str, optional): Flag as typed
        """
        try:
            value = parse_field_value(self.field, values)
        except ArgumentError as e:
            raise argparse.ArgumentError(self, str(e)) from e
        _action_list(namespace).append(SetField(self.field, value))


class ClearFieldAction(argparse.Action):
    """argparse action recording a ClearField for one registry field."""

    def __init__(self, option_strings, dest, field: FieldSpec = None, **kwargs):
        """
        Initialize the action.

        Args:
            option_strings (list): Flag names
            dest (str): Namespace attribute (unused, actions share one list)
            field (FieldSpec): Field this flag clears
            **kwargs: Passed on to argparse.Action
        """
        self.field = field
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """
        Queue the clear.

        Args:
            parser (argparse.ArgumentParser): The parser
            namespace (argparse.Namespace): Namespace being filled
            values (list): Always empty
            option_string (str, optional): Flag as typed
        """
        _action_list(namespace).append(ClearField(self.field))


class ClearAllAction(argparse.Action):
    """argparse action recording a ClearField for every registry field."""

    def __init__(self, option_strings, dest, **kwargs):
        """
        Initialize the action.

        Args:
            option_strings (list): Flag names
            dest (str): Namespace attribute (unused, actions share one list)
            **kwargs: Passed on to argparse.Action
        """
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """
        Queue clears for all fields.

        Args:
            parser (argparse.ArgumentParser): The parser
            namespace (argparse.Namespace): Namespace being filled
            values (list): Always empty
            option_string (str, optional): Flag as typed
        """
        _action_list(namespace).extend(clear_all())


class RenameAction(argparse.Action):
    """argparse action storing the rename spec together with its sanitize mode."""

    def __init__(self, option_strings, dest, mode: SanitizeMode = SanitizeMode.SHELL, **kwargs):
        """
        Initialize the action.

        Args:
            option_strings (list): Flag names
            dest (str): Namespace attribute for the spec
            mode (SanitizeMode): Sanitize mode this flag selects
            **kwargs: Passed on to argparse.Action
        """
        self.mode = mode
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """
        Store the spec and mode.

        Args:
            parser (argparse.ArgumentParser): The parser
            namespace (argparse.Namespace): Namespace being filled
            values (CompiledSpec): The compiled spec
            option_string (str, optional): Flag as typed
        """
        setattr(namespace, self.dest, values)
        namespace.rename_mode = self.mode


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command line parser.

    Returns:
        argparse.ArgumentParser: Parser with one set/clear flag pair per field
    """
    field_help = "\n".join(
        f"  %{field.code} / %{field.code.upper()}  {field.name:<8} ({field.value_type.value})"
        for field in FIELDS
    )

    parser = argparse.ArgumentParser(
        prog="tagsmith",
        description="Edit audio tags, fill tags from filenames and rename files from tags",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""Examples:
  # List populated fields
  tagsmith *.flac

  # Set artist and album, clear the comment
  tagsmith -r "Portishead" -l "Dummy" --no-comment *.flac

  # Fill track and title in from "03 - Glory Box.flac"
  tagsmith --extract "%n - %T" *.flac

  # Rename to "03-glory_box.flac"
  tagsmith --rename "%n-%_t" *.flac

Spec placeholders (lowercase letter downcases the value):
{field_help}

  %_t, %-t, %.t ...  use the character after % as substitution character
                     for unsafe characters when renaming (default: remove)

Text outside placeholders is copied as-is. --rename treats whitespace and
shell metacharacters as unsafe, --rename-fs only whitespace and characters
filesystems reject.
""")

    parser.add_argument('files', nargs='*', help='Audio files or directories to process')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")

    fields_group = parser.add_argument_group('field edits')
    for field in FIELDS:
        fields_group.add_argument(
            f"-{field.code}", f"--{field.name}",
            action=SetFieldAction, field=field, dest='actions', metavar='VALUE',
            help=f"Set {field.name}" + (" (base-10 integer)" if field.is_integer else ""),
        )
        fields_group.add_argument(
            f"--no-{field.name}",
            action=ClearFieldAction, field=field, dest='actions',
            help=f"Clear {field.name}",
        )
    fields_group.add_argument('--clear', action=ClearAllAction, dest='actions',
                              help='Clear all fields')

    naming_group = parser.add_argument_group('filename specs')
    naming_group.add_argument('--extract', metavar='SPEC', type=spec_argument,
                              help='Set fields from the filename using SPEC')
    naming_group.add_argument('--rename', metavar='SPEC', type=spec_argument, dest='rename',
                              action=RenameAction, mode=SanitizeMode.SHELL,
                              help='Rename files using SPEC, replacing shell-unsafe characters')
    naming_group.add_argument('--rename-fs', metavar='SPEC', type=spec_argument, dest='rename',
                              action=RenameAction, mode=SanitizeMode.FILESYSTEM,
                              help='Like --rename, but only replace filesystem-unsafe characters')

    behavior_group = parser.add_argument_group('behavior')
    behavior_group.add_argument('--dry-run', action='store_true',
                                help='Show what would be saved and renamed without changing anything')
    behavior_group.add_argument('--recursive', action='store_true',
                                help='Recurse into subdirectories of directory inputs')
    behavior_group.add_argument('--logging', choices=['low', 'high'], default='low',
                                help='Logging level: low (default) or high (verbose)')

    parser.set_defaults(actions=None, rename=None, rename_mode=SanitizeMode.SHELL)
    return parser


class TagProcessor:
    """
    Runs the per-file edit/extract/rename pipeline over a batch of files.
    """

    def __init__(self, options: Dict[str, Any], opener=None):
        """
        Initialize the processor.

        Args:
            options (dict): Processing options: 'actions', 'extract', 'rename',
                'rename_mode', 'dry_run', 'recursive'
            opener (callable, optional): Opens a path and returns a tag accessor;
                defaults to TagFile
        """
        self.options = options
        self.opener = opener or TagFile
        self.processed_count = 0
        self.saved_count = 0
        self.renamed_count = 0
        self.failed_count = 0

    @property
    def editing(self) -> bool:
        """
        Check whether any edit, extract or rename was requested.

        Returns:
            bool: False when files should only be listed
        """
        return bool(self.options.get('actions') or self.options.get('extract')
                    or self.options.get('rename'))

    def expand_inputs(self, inputs: List[str]) -> List[str]:
        """
        Expand directory inputs into the audio files they contain.

        Args:
            inputs (List[str]): Paths given on the command line

        Returns:
            List[str]: File paths, in input order; directory contents sorted
        """
        files = []
        for path in inputs:
            if not os.path.isdir(path):
                files.append(path)
                continue

            found = []
            if self.options.get('recursive', False):
                for root, _, names in os.walk(path):
                    found.extend(os.path.join(root, name) for name in names)
            else:
                found = [os.path.join(path, name) for name in os.listdir(path)
                         if os.path.isfile(os.path.join(path, name))]

            audio = sorted(p for p in found if os.path.splitext(p)[1].lower() in AUDIO_EXTENSIONS)
            logger.debug(f"Found {len(audio)} audio files in {path}")
            files.extend(audio)
        return files

    def display(self, filepath: str, tags):
        """
        Print a file's populated fields.

        Args:
            filepath (str): Path of the file
            tags: Tag accessor answering get(name)
        """
        print(filepath)
        for field in FIELDS:
            value = tags.get(field.name)
            if value:
                print(f"  {field.name + ':':<{DISPLAY_COLUMN}}{value}")

    def _save(self, filepath: str, tags):
        """
        Save tags unless running dry.

        Args:
            filepath (str): Path of the file
            tags: Tag accessor with a save() method
        """
        if self.options.get('dry_run', False):
            logger.info(f"[DRY RUN] Would save tags: {os.path.basename(filepath)}")
            return
        tags.save()
        self.saved_count += 1

    def _extract(self, filepath: str, tags):
        """
        Fill tags from the filename and save.

        Args:
            filepath (str): Path of the file
            tags: Tag accessor

        Raises:
            ExtractionMismatch: If the filename does not match the spec
        """
        spec = self.options['extract']
        stem = os.path.splitext(os.path.basename(filepath))[0]
        if not extract_into(spec, stem, tags):
            raise ExtractionMismatch(filepath, f"Filename does not match '{spec.source}': {os.path.basename(filepath)}")
        self._save(filepath, tags)

    def _edit(self, filepath: str, tags):
        """
        Apply the queued field actions and save.

        Args:
            filepath (str): Path of the file
            tags: Tag accessor
        """
        actions = self.options['actions']
        logger.debug(f"Applying {', '.join(a.describe() for a in actions)} to {os.path.basename(filepath)}")
        apply_actions(actions, tags)
        self._save(filepath, tags)

    def _rename(self, filepath: str, tags):
        """
        Rename the file from its tags.

        Args:
            filepath (str): Path of the file
            tags: Tag accessor answering get(name)
        """
        mode = self.options.get('rename_mode', SanitizeMode.SHELL)
        name = new_filename(self.options['rename'], tags, filepath, mode.dangerous)
        if rename_file(filepath, name, self.options.get('dry_run', False)) != filepath:
            self.renamed_count += 1

    def process_file(self, filepath: str) -> bool:
        """
        Run every requested step on one file.

        A failing step is reported and marks the file as failed, but the
        remaining steps still run.

        Args:
            filepath (str): Path of the file

        Returns:
            bool: True if no step reported a problem
        """
        try:
            tags = self.opener(filepath)
        except FileError as e:
            logger.error(str(e))
            return False

        self.processed_count += 1
        ok = True
        with tags:
            if not self.editing:
                self.display(filepath, tags)
                return True

            steps = []
            if self.options.get('extract'):
                steps.append(self._extract)
            if self.options.get('actions'):
                steps.append(self._edit)
            if self.options.get('rename'):
                steps.append(self._rename)

            for step in steps:
                try:
                    step(filepath, tags)
                except FileError as e:
                    logger.error(str(e))
                    ok = False
                except OSError as e:
                    logger.error(f"Failed to process {os.path.basename(filepath)}: {e}")
                    ok = False
        return ok

    def process(self, inputs: List[str]) -> int:
        """
        Process a batch of files, continuing past failures.

        Args:
            inputs (List[str]): Files or directories given on the command line

        Returns:
            int: Exit code, 0 if every file went through without a problem
        """
        failed = False
        for filepath in self.expand_inputs(inputs):
            if not self.process_file(filepath):
                self.failed_count += 1
                failed = True

        if self.editing:
            prefix = "Dry run completed" if self.options.get('dry_run') else "Completed"
            logger.info(f"{prefix}: {self.processed_count} files processed, "
                        f"{self.saved_count} saved, {self.renamed_count} renamed")
        if self.failed_count:
            logger.error(f"ERRORS: {self.failed_count} files had problems, see messages above")

        return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function for command-line usage.

    Args:
        argv (List[str], optional): Arguments without the program name;
            defaults to sys.argv[1:]

    Returns:
        int: Exit code (0 for success, 1 for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.logging == "high":
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.files:
        parser.print_usage(sys.stderr)
        return 1

    options = {
        'actions': args.actions or [],
        'extract': args.extract,
        'rename': args.rename,
        'rename_mode': args.rename_mode,
        'dry_run': args.dry_run,
        'recursive': args.recursive,
    }

    processor = TagProcessor(options)
    return processor.process(args.files)


if __name__ == "__main__":
    sys.exit(main())
