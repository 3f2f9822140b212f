"""Timeline of a scenario

This module turns the lines of a scenario into
    - asciicast v2 output events, timed as if a person was typing the
    commands on a keyboard (`TimelineBuilder.build`)
    - preview lines, the static rendering of the session used for the SVG
    preview (`TimelineBuilder.preview_lines`)

Both outputs are produced in a single pass over the scenario. Events are
yielded as soon as they are known so that they can be written immediately,
the preview lines are only complete once all the events have been consumed.
"""
import logging
from collections import namedtuple

from wcwidth import wcswidth

from asciinema_scenario.asciicast import output_event
from asciinema_scenario.config import ScenarioConfig
from asciinema_scenario.scenario import (ClearScreen, Comment, ConfigDirective,
                                         Idle, LiteralLine, PromptedCommand,
                                         TimeoutDirective, classify_line)

logger = logging.getLogger(__name__)

CLEAR_SCREEN = '\r\x1b[2J\r\x1b[H'
BOLD = '\x1b[1m'
RESET = '\x1b[0m'
GREEN = '\x1b[32m'
NEWLINE = '\r\n'
PROMPT = '$ '

# Character starting the highlighted part of a typed command
HIGHLIGHT_MARKER = '#'

# Durations expressed as a number of steps
INITIAL_STEPS = 3
PAUSE_STEPS = 3
CLEAR_SCREEN_STEPS = 18

# States of the typing state machine
NORMAL = 'normal'
BRIGHT = 'bright'

Segment = namedtuple('Segment', ['text', 'style'])
Segment.__new__.__defaults__ = (None,)
Segment.__doc__ = 'Piece of text of a preview line'
Segment.style.__doc__ = "None for plain text, 'prompt' or 'highlight' otherwise"

_PreviewLine = namedtuple('PreviewLine', ['prompt', 'text', 'typed'])


class PreviewLine(_PreviewLine):
    """Line of the static preview of a scenario

    prompt: Label of the prompt of a typed command ('' for a bare prompt)
    text: Command typed after the prompt, or literal line
    typed: True if the line is a command typed after a prompt
    """
    @classmethod
    def command(cls, prompt, text):
        return cls(prompt, text, True)

    @classmethod
    def literal(cls, text):
        return cls('', text, False)

    def segments(self):
        """Return the list of Segments making up this line"""
        if not self.typed:
            return [Segment(self.text)]

        segments = []
        if self.prompt:
            segments.append(Segment(self.prompt, 'prompt'))
        segments.append(Segment(PROMPT))
        head, marker, tail = self.text.partition(HIGHLIGHT_MARKER)
        if head:
            segments.append(Segment(head))
        if marker:
            segments.append(Segment(marker + tail, 'highlight'))
        return segments

    def raw_items(self):
        """Return the raw strings this line was made of"""
        if self.typed:
            return [self.prompt, self.text]
        return [self.text]


class TimelineState:
    """Virtual clock of a recording"""
    def __init__(self, step, time=0.0):
        self.step = step
        self.time = time

    def advance(self, steps=1):
        self.time += steps * self.step

    def wait(self, seconds):
        self.time += seconds

    def __repr__(self):
        return 'TimelineState(step={}, time={})'.format(self.step, self.time)


def type_text(state, text):
    """Yield the events displaying 'text' as if it was typed on a keyboard

    Each character is written one step after the previous one. Characters
    starting at a HIGHLIGHT_MARKER are written in bold. A new line is written
    after a short pause once all characters have been typed.

    :param state: TimelineState, updated in place
    :param text: Text to type
    :return: The text typed
    """
    mode = NORMAL
    for char in text:
        state.advance()
        if char == HIGHLIGHT_MARKER:
            yield output_event(state.time, BOLD)
            mode = BRIGHT
        yield output_event(state.time, char)

    if mode == BRIGHT:
        yield output_event(state.time, RESET)

    state.advance(PAUSE_STEPS)
    yield output_event(state.time, NEWLINE)
    return text


def render_prompt(prompt):
    if prompt:
        return '{}{}{}{}'.format(GREEN, prompt, RESET, PROMPT)
    return PROMPT


class TimelineBuilder:
    """Build the events and the preview lines of a scenario

    Usage:
        builder = TimelineBuilder(config)
        for event in builder.build(lines):
            ...
        builder.preview_lines
    """
    def __init__(self, config=None, preview=True):
        self.config = config if config is not None else ScenarioConfig()
        self.preview = preview
        self.state = TimelineState(self.config.step)
        self.preview_lines = []
        self._handlers = {
            ConfigDirective: self._skip,
            Comment: self._skip,
            TimeoutDirective: self._timeout,
            ClearScreen: self._clear_screen,
            Idle: self._idle,
            PromptedCommand: self._prompted_command,
            LiteralLine: self._literal_line,
        }

    def build(self, lines):
        """Yield the output events of the scenario made of 'lines'

        Each call starts a new recording: the clock and the preview lines
        are reset.

        Raise TimeoutDecodeError if a timeout directive is invalid.
        """
        self.state.time = INITIAL_STEPS * self.config.step
        self.preview_lines = []
        for index, line in enumerate(lines):
            directive = classify_line(index, line)
            logger.debug('Line {} at {:.3f}s: {}'.format(index + 1, self.state.time,
                                                          directive))
            handler = self._handlers[type(directive)]
            yield from handler(index, directive)

    def _add_preview_line(self, preview_line):
        if self.preview:
            self.preview_lines.append(preview_line)

    def _check_width(self, index, text):
        width = wcswidth(text)
        if width > self.config.width:
            logger.warning('Line {} is {} columns wide but the terminal only has {} '
                           'columns'.format(index + 1, width, self.config.width))

    def _skip(self, index, directive):
        return iter(())

    def _timeout(self, index, directive):
        self.state.wait(directive.seconds)
        return iter(())

    def _idle(self, index, directive):
        self.state.advance(PAUSE_STEPS)
        return iter(())

    def _clear_screen(self, index, directive):
        self.state.advance(CLEAR_SCREEN_STEPS)
        yield output_event(self.state.time, CLEAR_SCREEN)
        self.state.advance(PAUSE_STEPS)

    def _prompted_command(self, index, directive):
        self._check_width(index, directive.prompt + PROMPT + directive.command)
        self.state.advance()
        yield output_event(self.state.time, render_prompt(directive.prompt))
        self.state.advance(PAUSE_STEPS)
        typed = yield from type_text(self.state, directive.command)
        self._add_preview_line(PreviewLine.command(directive.prompt, typed))

    def _literal_line(self, index, directive):
        self._check_width(index, directive.text)
        yield output_event(self.state.time, directive.text + NEWLINE)
        self._add_preview_line(PreviewLine.literal(directive.text))
