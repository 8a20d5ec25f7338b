import logging
import sys
import unittest

from io import StringIO

from chaosazure.cli import levels, main, parse_args
from chaosazure.common import ApiError, AuthError, ExitCode, SelectionError
from chaosazure.pipeline import OperationPipeline
from test.fakes import FakeCredential, RecordingSleep, compute_client

REQUIRED = ['-t', 'tenant-id', '-s', 'subscription-id', '-c', 'client-id',
            '-p', 'secret', '-g', 'chaos-rg']


def fake_pipeline(client_class, error=None):
    """Build an OperationPipeline type wired to fake Azure collaborators."""
    class FakePipeline(OperationPipeline):
        instances = []

        def __init__(self, config, plan, timeout=None):
            super().__init__(config, plan, timeout=timeout,
                             credential_class=FakeCredential,
                             client_class=client_class,
                             sleep=RecordingSleep())
            FakePipeline.instances.append(self)

        async def execute(self):
            if error:
                raise error
            return await super().execute()
    return FakePipeline


class TestCli(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.stderr = sys.stderr

    def setUp(self):
        # Swallow argparse usage output
        sys.stderr = StringIO()

    def tearDown(self):
        sys.stderr = self.stderr

    def assertUsageError(self, argv):
        with self.assertRaises(SystemExit) as e:
            parse_args(argv)
        self.assertEqual(e.exception.code, ExitCode.CONFIG_ERROR.value)

    def test_arg_log_level(self):
        for k, v in levels.items():
            test_args = parse_args(REQUIRED + ['-r', 'vm1', '-o', 'start',
                                               '-l', k])
            self.assertEqual(test_args.log_level, v)

        test_args = parse_args(REQUIRED + ['-r', 'vm1', '-o', 'start', '-l'])
        self.assertEqual(test_args.log_level, logging.INFO,
                         msg='Invalid const level')
        test_args = parse_args(REQUIRED + ['-r', 'vm1', '-o', 'start'])
        self.assertEqual(test_args.log_level, logging.INFO,
                         msg='Invalid default level')

    def test_long_options(self):
        test_args = parse_args(['--tenant', 't', '--subscription', 's',
                                '--client', 'c', '--password', 'p',
                                '--resourcegrp', 'g', '--randomresource',
                                '--resourcematch', '^web-',
                                '--operation', 'powercycle',
                                '--delay', '5-10', '--timeout', '120'])
        self.assertEqual(test_args.tenant, 't')
        self.assertEqual(test_args.resourcegrp, 'g')
        self.assertTrue(test_args.randomresource)
        self.assertIsNone(test_args.resource)
        self.assertEqual(test_args.resourcematch, '^web-')
        self.assertEqual(test_args.delay, '5-10')
        self.assertEqual(test_args.timeout, 120)

    def test_missing_required_flag(self):
        for i in range(0, len(REQUIRED), 2):
            argv = REQUIRED[:i] + REQUIRED[i + 2:] + ['-r', 'vm1',
                                                      '-o', 'start']
            self.assertUsageError(argv)
        self.assertUsageError(REQUIRED + ['-r', 'vm1'])

    def test_resource_or_random_resource(self):
        self.assertUsageError(REQUIRED + ['-o', 'start'])
        self.assertUsageError(REQUIRED + ['-r', 'vm1', '-a', '-o', 'start'])

    def test_match_requires_random_resource(self):
        self.assertUsageError(REQUIRED + ['-r', 'vm1', '-m', '^web-',
                                          '-o', 'start'])

    def test_invalid_match(self):
        self.assertUsageError(REQUIRED + ['-a', '-m', 'web-(', '-o', 'start'])

    def test_unsupported_operation(self):
        self.assertUsageError(REQUIRED + ['-r', 'vm1', '-o', 'reboot'])

    def test_invalid_timeout(self):
        self.assertUsageError(REQUIRED + ['-r', 'vm1', '-o', 'start',
                                          '--timeout', '0'])

    def test_main_success(self):
        client_class = compute_client(vms=['web-1', 'web-2', 'db-1'])
        pipeline_class = fake_pipeline(client_class)
        rtn = main(REQUIRED + ['-a', '-m', '^web-', '-o', 'restart'],
                   pipeline_class=pipeline_class)
        self.assertEqual(rtn, ExitCode.SUCCESS.value)

        calls = client_class.instances[0].calls
        self.assertEqual(calls[0], ('list', 'chaos-rg'))
        self.assertEqual(calls[1][0], 'restart')
        self.assertIn(calls[1][2], ['web-1', 'web-2'])

    def test_main_powercycle(self):
        client_class = compute_client()
        pipeline_class = fake_pipeline(client_class)
        rtn = main(REQUIRED + ['-r', 'vm1', '-o', 'powercycle', '-d', '5-10'],
                   pipeline_class=pipeline_class)
        self.assertEqual(rtn, ExitCode.SUCCESS.value)

        pipeline = pipeline_class.instances[0]
        self.assertEqual(len(pipeline.sleep.delays), 1)
        self.assertTrue(5 <= pipeline.sleep.delays[0] <= 10)
        self.assertEqual(client_class.instances[0].calls,
                         [('power_off', 'chaos-rg', 'vm1'),
                          ('start', 'chaos-rg', 'vm1')])

    def test_main_bad_delay(self):
        client_class = compute_client()
        pipeline_class = fake_pipeline(client_class)
        rtn = main(REQUIRED + ['-r', 'vm1', '-o', 'powercycle', '-d', '10-5'],
                   pipeline_class=pipeline_class)
        self.assertEqual(rtn, ExitCode.CONFIG_ERROR.value)
        # The pipeline never starts
        self.assertEqual(pipeline_class.instances, [])
        self.assertEqual(client_class.instances, [])

    def test_main_exit_codes(self):
        errors = [
            (AuthError('denied'), ExitCode.AUTH_ERROR),
            (ApiError('not found'), ExitCode.API_ERROR),
            (SelectionError('no resources matched'),
             ExitCode.SELECTION_ERROR)
        ]
        for error, code in errors:
            rtn = main(REQUIRED + ['-r', 'vm1', '-o', 'stop'],
                       pipeline_class=fake_pipeline(compute_client(), error))
            self.assertEqual(rtn, code.value)
            self.assertNotEqual(rtn, 0)


if __name__ == '__main__':
    unittest.main()
