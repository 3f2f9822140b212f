"""Scenario files

A scenario is a plain text file describing a terminal session. Each line is
classified by its prefix, in this order (first match wins):

    #! {"step": 0.1}    configuration header, first line only
    #timeout:2.5        pause without output
    # ...               comment, ignored
    $ ls                command typed after a bare prompt
    (nix-shell) $ ls    command typed after a labeled prompt
    --                  clear the screen
    <blank line>        short pause
    ...                 anything else is printed as is
"""
import math
import re
from collections import namedtuple

from asciinema_scenario.config import has_header

TIMEOUT_PREFIX = '#timeout:'
TIMEOUT_PATTERN = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?', re.ASCII)
COMMENT_PREFIX = '#'
CLEAR_PREFIX = '--'

# Mapping between the prefix of a console line and the label of its prompt
PROMPTS = [
    ('$ ', ''),
    ('(nix-shell) $ ', '(nix-shell) '),
]


class ScenarioError(Exception):
    pass


class TimeoutDecodeError(ScenarioError):
    pass


ConfigDirective = namedtuple('ConfigDirective', [])
TimeoutDirective = namedtuple('TimeoutDirective', ['seconds'])
Comment = namedtuple('Comment', [])
PromptedCommand = namedtuple('PromptedCommand', ['prompt', 'command'])
ClearScreen = namedtuple('ClearScreen', [])
Idle = namedtuple('Idle', [])
LiteralLine = namedtuple('LiteralLine', ['text'])


def _parse_timeout(value):
    if not TIMEOUT_PATTERN.fullmatch(value.strip()):
        raise TimeoutDecodeError('Invalid timeout: "{}"'.format(value))
    seconds = float(value.strip())
    if not math.isfinite(seconds) or seconds < 0:
        raise TimeoutDecodeError('Timeout must be a non negative number of '
                                 'seconds, got "{}"'.format(value))
    return seconds


def classify_line(index, line):
    """Return the directive represented by the line at position 'index'

    Raise TimeoutDecodeError if the line is a timeout directive with an
    invalid duration.
    """
    if index == 0 and has_header(line):
        return ConfigDirective()

    if line.startswith(TIMEOUT_PREFIX):
        return TimeoutDirective(_parse_timeout(line[len(TIMEOUT_PREFIX):]))

    if line.startswith(COMMENT_PREFIX):
        return Comment()

    for prefix, prompt in PROMPTS:
        if line.startswith(prefix):
            return PromptedCommand(prompt, line[len(prefix):])

    if line.startswith(CLEAR_PREFIX):
        return ClearScreen()

    if not line.strip():
        return Idle()

    return LiteralLine(line)


def split_lines(text):
    """Split 'text' into lines, without their '\\n' or '\\r\\n' terminator"""
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def read_scenario(filename):
    """Return the lines of the scenario file"""
    with open(filename, 'r', encoding='utf-8', newline='') as scenario_file:
        return split_lines(scenario_file.read())
