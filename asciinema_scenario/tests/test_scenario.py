import os
import tempfile
import unittest

from asciinema_scenario import scenario
from asciinema_scenario.scenario import ClearScreen, Comment, ConfigDirective, Idle, \
                                        LiteralLine, PromptedCommand, TimeoutDirective


class TestScenario(unittest.TestCase):
    def test_classify_line(self):
        test_cases = [
            ('header', 0, '#! {"step": 0.1}', ConfigDirective()),
            ('header after first line', 1, '#! {"step": 0.1}', Comment()),
            ('timeout', 3, '#timeout:2.5', TimeoutDirective(2.5)),
            ('timeout with spaces', 3, '#timeout: 1 ', TimeoutDirective(1.0)),
            ('timeout on first line', 0, '#timeout:1', TimeoutDirective(1.0)),
            ('timeout with exponent', 3, '#timeout:5e-1', TimeoutDirective(0.5)),
            ('timeout without integral part', 3, '#timeout:.25', TimeoutDirective(0.25)),
            ('comment', 2, '# some comment', Comment()),
            ('bare prompt', 1, '$ echo hi', PromptedCommand('', 'echo hi')),
            ('empty command', 1, '$ ', PromptedCommand('', '')),
            ('labeled prompt', 1, '(nix-shell) $ make', PromptedCommand('(nix-shell) ', 'make')),
            ('prompt without space', 1, '$ls', LiteralLine('$ls')),
            ('clear', 4, '--', ClearScreen()),
            ('clear with text', 4, '-- next part', ClearScreen()),
            ('empty line', 5, '', Idle()),
            ('whitespace', 5, ' \t ', Idle()),
            ('literal', 6, 'total 0', LiteralLine('total 0')),
            ('literal with indent', 6, '  - item', LiteralLine('  - item')),
        ]
        for case, index, line, expected in test_cases:
            with self.subTest(case=case):
                directive = scenario.classify_line(index, line)
                self.assertIs(type(directive), type(expected))
                self.assertEqual(directive, expected)

        failure_test_cases = [
            ('not a number', '#timeout:soon'),
            ('empty value', '#timeout:'),
            ('negative value', '#timeout:-1'),
            ('infinite value', '#timeout:inf'),
            ('not a number value', '#timeout:nan'),
            ('digit separator', '#timeout:1_0'),
            ('non ASCII digits', '#timeout:\u0661'),
            ('trailing characters', '#timeout:1s'),
        ]
        for case, line in failure_test_cases:
            with self.subTest(case=case):
                with self.assertRaises(scenario.TimeoutDecodeError):
                    scenario.classify_line(3, line)

    def test_split_lines(self):
        test_cases = [
            ('', []),
            ('a', ['a']),
            ('a\n', ['a']),
            ('a\r\nb\r\n', ['a', 'b']),
            ('a\n\nb', ['a', '', 'b']),
            ('a\rb\n', ['a\rb']),
        ]
        for text, expected_lines in test_cases:
            with self.subTest(case=repr(text)):
                self.assertEqual(scenario.split_lines(text), expected_lines)

    def test_read_scenario(self):
        fd, filename = tempfile.mkstemp(prefix='asciinema_scenario_', suffix='.txt')
        os.close(fd)
        self.addCleanup(os.remove, filename)
        with open(filename, 'w', encoding='utf-8', newline='') as scenario_file:
            scenario_file.write('#! {"step": 0.2}\r\n$ echo ☀\r\n\r\n')

        self.assertEqual(scenario.read_scenario(filename),
                         ['#! {"step": 0.2}', '$ echo ☀', ''])


if __name__ == '__main__':
    unittest.main()
