"""Tests for the tokenexport CLI commands and exit codes."""

import io
import json
import os
import shutil
import tempfile
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

import yaml

from tokenexport.cli.main import create_parser, main
from tokenexport.exceptions import TransportFailure
from tokenexport.publish.github import PushResult
from tokenexport.security.secrets import FIGMA_TOKEN_ENV, GITHUB_TOKEN_ENV


SAMPLE_SNAPSHOT_FILE = Path(__file__).parent / "fixtures" / "variables.json"


class TestCLI(TestCase):
    """End-to-end command runs against a temporary workspace."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.workspace = self.test_dir / 'workspace'
        self.workspace.mkdir()

        self.snapshot_file = self.workspace / 'variables.json'
        shutil.copy(SAMPLE_SNAPSHOT_FILE, self.snapshot_file)

        self.original_cwd = Path.cwd()
        os.chdir(self.workspace)

    def tearDown(self):
        os.chdir(self.original_cwd)
        shutil.rmtree(self.test_dir)

    def write_config(self, **overrides) -> Path:
        config = {
            'version': '1',
            'name': 'brand',
            'source': {'snapshot': 'variables.json'},
            'output_dir': 'build/tokens',
            'formats': ['tokens', 'css', 'tailwind'],
        }
        config.update(overrides)
        path = self.workspace / 'tokenexport.yml'
        path.write_text(yaml.dump(config))
        return path

    def test_no_command_prints_help(self):
        with patch('sys.stdout', new_callable=io.StringIO):
            self.assertEqual(main([]), 1)

    def test_parser_defaults(self):
        args = create_parser().parse_args(['export', 'variables.json'])
        self.assertEqual(args.format, 'tokens')
        self.assertIsNone(args.collection)
        self.assertEqual(args.log_level, 'info')

    def test_export_to_file(self):
        output = self.workspace / 'out' / 'tokens.css'

        code = main(['export', str(self.snapshot_file), '--format', 'css', '--output', str(output), '--quiet'])

        self.assertEqual(code, 0)
        css = output.read_text()
        self.assertIn(':root {', css)
        self.assertIn('--colors-light-brand-primary: #ff0000;', css)

    def test_export_to_stdout_with_collection_filter(self):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main(['export', str(self.snapshot_file), '--collection', 'Spacing', '--quiet'])

        self.assertEqual(code, 0)
        self.assertEqual(list(json.loads(stdout.getvalue())), ['Spacing/Default'])

    def test_export_dry_run_writes_nothing(self):
        output = self.workspace / 'tokens.json'

        code = main(['export', str(self.snapshot_file), '--output', str(output), '--dry-run', '--quiet'])

        self.assertEqual(code, 0)
        self.assertFalse(output.exists())

    def test_export_missing_snapshot(self):
        self.assertEqual(main(['export', 'missing.json', '--quiet']), 1)

    def test_export_invalid_snapshot(self):
        bad = self.workspace / 'bad.json'
        bad.write_text(json.dumps({'variables': [{'id': 'v'}]}))

        self.assertEqual(main(['export', str(bad), '--quiet']), 2)

    def test_collections(self):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main(['collections', str(self.snapshot_file), '--quiet'])

        self.assertEqual(code, 0)
        catalog = json.loads(stdout.getvalue())
        self.assertEqual(sorted(catalog), ['Colors', 'Paint Styles', 'Spacing', 'Text Styles'])

    def test_run_writes_every_format(self):
        config = self.write_config()

        code = main(['run', str(config), '--quiet'])

        self.assertEqual(code, 0)
        out_dir = self.workspace / 'build' / 'tokens'
        self.assertEqual(
            sorted(p.name for p in out_dir.iterdir()),
            ['design-tokens.css', 'tailwind.config.js', 'tokens.json'],
        )
        tokens = json.loads((out_dir / 'tokens.json').read_text())
        self.assertEqual(tokens['Colors/Light']['Brand']['Primary']['$value'], '#ff0000')

    def test_run_applies_collection_filter(self):
        config = self.write_config(collections=['Colors'], formats=['tokens'])

        self.assertEqual(main(['run', str(config), '--quiet']), 0)

        tokens = json.loads((self.workspace / 'build' / 'tokens' / 'tokens.json').read_text())
        self.assertEqual(list(tokens), ['Colors/Light', 'Colors/Dark'])

    def test_run_dry_run(self):
        config = self.write_config()

        self.assertEqual(main(['run', str(config), '--dry-run', '--quiet']), 0)
        self.assertFalse((self.workspace / 'build').exists())

    def test_run_invalid_config(self):
        config = self.write_config(formats=['swiftui'])
        self.assertEqual(main(['run', str(config), '--quiet']), 2)

    def test_run_missing_config(self):
        self.assertEqual(main(['run', 'missing.yml', '--quiet']), 1)

    def test_run_push_requires_github_section(self):
        config = self.write_config()
        self.assertEqual(main(['run', str(config), '--push', '--quiet']), 2)

    def test_run_push_requires_token(self):
        config = self.write_config(github={'repo': 'https://github.com/acme/tokens'})

        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(main(['run', str(config), '--push', '--quiet']), 2)

    def test_run_figma_source_requires_token(self):
        config = self.write_config(source={'figma_file': 'AbC123'})

        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(main(['run', str(config), '--quiet']), 2)

    @patch('tokenexport.cli.commands.run.GitHubPublisher')
    def test_run_push(self, publisher_cls):
        publisher = publisher_cls.return_value
        publisher.push.return_value = PushResult(True, 'Successfully pushed', 'https://github.com/x')
        config = self.write_config(
            formats=['tokens', 'css'],
            github={
                'repo': 'https://github.com/acme/tokens',
                'branch': 'design',
                'path': 'web',
                'commit_message': 'chore: sync tokens',
            },
        )

        with patch.dict(os.environ, {GITHUB_TOKEN_ENV: 'ghp_test'}):
            code = main(['run', str(config), '--push', '--quiet'])

        self.assertEqual(code, 0)
        publisher_cls.assert_called_once_with('ghp_test')
        self.assertEqual(publisher.push.call_count, 2)
        kwargs = publisher.push.call_args_list[1].kwargs
        self.assertEqual(kwargs['filename'], 'design-tokens.css')
        self.assertEqual(kwargs['branch'], 'design')
        self.assertEqual(kwargs['path'], 'web')
        self.assertEqual(kwargs['commit_message'], 'chore: sync tokens')
        publisher.close.assert_called_once()

    @patch('tokenexport.cli.commands.run.GitHubPublisher')
    def test_run_push_failure_exit_code(self, publisher_cls):
        publisher_cls.return_value.push.return_value = PushResult(False, 'Failed to push to GitHub: boom')
        config = self.write_config(formats=['tokens'], github={'repo': 'https://github.com/acme/tokens'})

        with patch.dict(os.environ, {GITHUB_TOKEN_ENV: 'ghp_test'}):
            self.assertEqual(main(['run', str(config), '--push', '--quiet']), 1)

    @patch('tokenexport.cli.commands.run.FigmaSnapshotSource')
    def test_run_transport_failure(self, source_cls):
        source_cls.return_value.load_snapshot.side_effect = TransportFailure('Figma API returned 500', 500)
        config = self.write_config(source={'figma_file': 'AbC123'})

        with patch.dict(os.environ, {FIGMA_TOKEN_ENV: 'figd_test'}):
            self.assertEqual(main(['run', str(config), '--quiet']), 1)
        source_cls.return_value.close.assert_called_once()

    def test_push_requires_token(self):
        with patch.dict(os.environ, {}, clear=True):
            code = main(['push', str(self.snapshot_file), '--repo', 'https://github.com/acme/tokens', '--quiet'])
        self.assertEqual(code, 2)

    def test_push_invalid_repo(self):
        code = main(['push', str(self.snapshot_file), '--repo', 'acme/tokens', '--token', 't', '--quiet'])
        self.assertEqual(code, 2)

    @patch('tokenexport.cli.commands.push.GitHubPublisher')
    def test_push_file(self, publisher_cls):
        publisher_cls.return_value.push.return_value = PushResult(True, 'ok', 'https://github.com/x')

        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main([
                'push', str(self.snapshot_file),
                '--repo', 'https://github.com/acme/tokens',
                '--path', 'figma',
                '--token', 'ghp_flag',
                '--message', 'chore: sync tokens',
                '--quiet',
            ])

        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue().strip(), 'https://github.com/x')
        publisher_cls.assert_called_once_with('ghp_flag')
        args = publisher_cls.return_value.push.call_args.args
        self.assertEqual(args[:4], ('https://github.com/acme/tokens', 'main', 'figma', 'variables.json'))
        self.assertEqual(args[5], 'chore: sync tokens')
        publisher_cls.return_value.close.assert_called_once()

    def test_fetch_requires_token(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(main(['fetch', 'AbC123', '--quiet']), 2)

    @patch('tokenexport.cli.commands.fetch.FigmaSnapshotSource')
    def test_fetch_writes_snapshot(self, source_cls):
        raw = json.loads(SAMPLE_SNAPSHOT_FILE.read_text())
        source_cls.return_value.fetch.return_value = raw
        output = self.workspace / 'fetched.json'

        with patch.dict(os.environ, {FIGMA_TOKEN_ENV: 'figd_test'}):
            code = main(['fetch', 'AbC123', '--output', str(output), '--quiet'])

        self.assertEqual(code, 0)
        source_cls.assert_called_once_with('AbC123', 'figd_test')
        self.assertEqual(json.loads(output.read_text()), raw)
        source_cls.return_value.close.assert_called_once()

    def test_message_from_file(self):
        message_file = self.workspace / 'message.json'
        message_file.write_text(json.dumps({'type': 'export-tailwind-css'}))

        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main(['message', str(self.snapshot_file), '--input', str(message_file), '--quiet'])

        self.assertEqual(code, 0)
        response = json.loads(stdout.getvalue())
        self.assertEqual(response['type'], 'export-tailwind-css-complete')

    def test_message_from_stdin_error_response(self):
        with patch('sys.stdin', io.StringIO('{"type": "bogus"}')), \
                patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main(['message', str(self.snapshot_file), '--quiet'])

        self.assertEqual(code, 1)
        self.assertEqual(json.loads(stdout.getvalue())['type'], 'export-error')

    def test_message_invalid_json(self):
        with patch('sys.stdin', io.StringIO('not json')):
            self.assertEqual(main(['message', str(self.snapshot_file), '--quiet']), 2)
