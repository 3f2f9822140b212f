import json
import unittest

import asciinema_scenario.config as config


class TestConfig(unittest.TestCase):
    def test_decode_header(self):
        test_cases = [
            ('no header', '$ echo hi', config.ScenarioConfig(0.1, 77, 20)),
            ('empty line', '', config.ScenarioConfig(0.1, 77, 20)),
            ('marker without space', '#!{"step": 1}', config.ScenarioConfig(0.1, 77, 20)),
            ('empty object', '#! {}', config.ScenarioConfig(0.1, 77, 20)),
            ('step only', '#! {"step":0.05}', config.ScenarioConfig(0.05, 77, 20)),
            ('integer step', '#! {"step": 1}', config.ScenarioConfig(1.0, 77, 20)),
            ('all attributes', '#! {"step": 0.1, "width": 80, "height": 24}',
             config.ScenarioConfig(0.1, 80, 24)),
            ('trailing new line', '#! {"width": 100}\n', config.ScenarioConfig(0.1, 100, 20)),
        ]
        for case, line, expected_config in test_cases:
            with self.subTest(case=case):
                self.assertEqual(config.decode_header(line), expected_config)

        failure_test_cases = [
            ('invalid JSON', '#! {step: 0.1}'),
            ('not an object', '#! [0.1, 80, 24]'),
            ('unknown attribute', '#! {"speed": 2}'),
            ('string step', '#! {"step": "fast"}'),
            ('negative step', '#! {"step": -0.1}'),
            ('zero width', '#! {"width": 0}'),
            ('float height', '#! {"height": 20.5}'),
            ('boolean width', '#! {"width": true}'),
            ('infinite step', '#! {"step": Infinity}'),
        ]
        for case, line in failure_test_cases:
            with self.subTest(case=case):
                with self.assertRaises(config.HeaderDecodeError):
                    config.decode_header(line)

    def test_header_round_trip(self):
        scenario_config = config.decode_header('#! {"step":0.1,"width":80,"height":24}')
        header = config.make_header(scenario_config)
        self.assertEqual(json.loads(header.to_json_line()),
                         {'version': 2, 'width': 80, 'height': 24})

    def test_has_header(self):
        self.assertTrue(config.has_header('#! {}'))
        self.assertFalse(config.has_header('#timeout:1'))
        self.assertFalse(config.has_header(' #! {}'))


if __name__ == '__main__':
    unittest.main()
