#!/usr/bin/env python3
"""
wikimark - Markdown preview renderer for a minimal wiki

Renders a raw wiki article to the same markup the live preview shows,
so articles can be checked or published without a browser.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Usage:
    wikimark inputdir/ outputdir/ --inputFile article.md

    The rendered fragment is written to outputdir/article.html.

Examples:
    # Render a fragment
    wikimark . output/ --inputFile article.md

    # Render a standalone HTML page
    wikimark . output/ --inputFile article.md --standalone

    # Verbose output
    wikimark . output/ --inputFile article.md -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Renderer, segment, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
          _ _    _                        _
__      _(_) | _(_)_ __ ___   __ _ _ __| | __
\ \ /\ / / | |/ / | '_ ` _ \ / _` | '__| |/ /
 \ V  V /| |   <| | | | | | | (_| | |  |   <
  \_/\_/ |_|_|\_\_|_| |_| |_|\__,_|_|  |_|\_\

  Markdown preview renderer
"""

# Define CLI arguments
parser = ArgumentParser(
    description="wikimark - render raw wiki text to HTML markup",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Raw wiki text file (relative to inputdir)"
)

parser.add_argument(
    "--standalone",
    default=False,
    action="store_true",
    help="Wrap the rendered fragment in a complete HTML document",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input file
            - outputFile: Path the rendered markup will be written to
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.outputFile = state.outputdir / appsettings.outputName_make(input_file.name)
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the authoritative raw text.

    Returns:
        ProgramState with added field:
            - rawText: Contents of the input file

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.rawText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.rawText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def markup_render(inputstate: ProgramState) -> ProgramState:
    """
    Render raw text to markup and write it to the output file.

    Returns:
        ProgramState with added fields:
            - markup: Rendered markup (document when --standalone)
            - renderResult: Dict containing:
                - status: bool (render success)
                - output_file: str (path to the written file)
                - segment_count: int (number of segments rendered)

    Exits:
        1 if no raw text is available or the output cannot be written
    """
    state = inputstate.copy()

    if state.rawText is None:
        print("Error: No raw text available", file=sys.stderr)
        sys.exit(1)

    LOG("Rendering markup...", level=1)
    renderer = Renderer()
    markup = renderer.render(state.rawText)
    if state.standalone:
        markup = renderer.htmlDocument_build(markup, title=state.inputSourceFile.stem)
    state.markup = markup

    try:
        state.outputFile.write_text(markup, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    state.renderResult = {
        "status": True,
        "output_file": str(state.outputFile),
        "segment_count": len(segment(state.rawText)),
    }
    LOG(f"Wrote {state.outputFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display render results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("✓ Rendering successful!", level=1)
    LOG(f"  Output: {state.renderResult['output_file']}", level=1)
    LOG(f"  Segments: {state.renderResult['segment_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="wikimark - Markdown preview renderer",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render a raw wiki article to HTML.

    Orchestrates the full pipeline:
        1. env_check: Validate paths, create the output directory
        2. source_read: Read the raw text
        3. markup_render: Render and write the markup
        4. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, markup_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
