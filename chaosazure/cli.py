import argparse
import logging
import re

import logzero

from chaosazure.actions.vm import operation_plan
from chaosazure.common import (
    ChaosAzureError,
    DEFAULT_CHAOS_OPERATION_TIMEOUT,
    ExitCode,
    Operation
)
from chaosazure.helpers import run
from chaosazure.pipeline import OperationPipeline, RunConfig
from logzero import logger

LOG_LEVEL_HELP = """Logging level.
                      [LOG-LEVEL]: notset, debug, info, warning, error, critical
                      Default: info"""
levels = {
    'notset': logging.NOTSET,
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL
}


# Command-line Argument Parsing
def log_level(v):
    if v.lower() in levels.keys():
        return levels[v.lower()]
    else:
        raise argparse.ArgumentTypeError(
            'Expected one of the following: {}.'.format(
                 ', '.join(levels.keys())))


def resource_match(v):
    try:
        re.compile(v)
    except re.error as e:
        raise argparse.ArgumentTypeError(
            'Invalid regular expression >{}<. Reason: {}'.format(v, e))
    return v


def positive_int(v):
    try:
        value = int(v)
    except ValueError:
        value = 0
    if value <= 0:
        raise argparse.ArgumentTypeError(
            'Expected a positive number of seconds. Got: {}'.format(v))
    return value


def program_args():
    parser = argparse.ArgumentParser(
        prog='chaosazure',
        description='Start, stop, restart or power cycle an Azure virtual ' \
                    'machine, chosen explicitly or at random.')

    parser.add_argument('-t', '--tenant', required=True, help='Tenant ID.')
    parser.add_argument('-s', '--subscription', required=True,
                        help='Subscription ID.')
    parser.add_argument('-c', '--client', required=True, help='Client ID.')
    parser.add_argument('-p', '--password', required=True,
                        help='Secret associated with the Client ID.')
    parser.add_argument('-g', '--resourcegrp', required=True,
                        help='The resource group to operate in.')

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument('-r', '--resource',
                        help='The name of the resource to operate on.')
    target.add_argument('-a', '--randomresource', action='store_true',
                        default=False, help='Choose a resource at random ' \
                        'from the resource group. (Limited to VMs)')

    parser.add_argument('-o', '--operation', required=True,
                        choices=[op.value for op in Operation],
                        help='The operation to perform on the specified ' \
                        'resource.')
    parser.add_argument('-m', '--resourcematch', type=resource_match,
                        help='A regular expression to match / filter the ' \
                        'list of random resources.')
    parser.add_argument('-d', '--delay', help='The delay to wait between ' \
                        'operations which require two steps (powercycle). ' \
                        'Can be an integer or a range of the form MIN-MAX ' \
                        '(a random number of seconds in the range). ' \
                        'Default: 60 seconds.')
    parser.add_argument('--timeout', type=positive_int,
                        default=DEFAULT_CHAOS_OPERATION_TIMEOUT,
                        help='Number of seconds each call to Azure may take ' \
                        'before the run is aborted. Default: ' \
                        '{}'.format(DEFAULT_CHAOS_OPERATION_TIMEOUT))
    parser.add_argument('-l', '--log-level', type=log_level, nargs='?',
                        const=logging.INFO, default=logging.INFO,
                        help=LOG_LEVEL_HELP)

    return parser


def parse_args(argv=None, parser=None):
    if parser is None:
        parser = program_args()
    args = parser.parse_args(args=argv)
    if args.resource and args.resourcematch:
        parser.error("Can not specify a resource match pattern when " \
                     "specifying a specific resource.")
    return args


def init(args):
    logzero.loglevel(args.log_level)
    logger.debug("Initializing...")
    logger.debug("tenant: %s subscription: %s client: %s resource group: %s",
                 args.tenant, args.subscription, args.client,
                 args.resourcegrp)


def run_config(args) -> RunConfig:
    return RunConfig(tenant=args.tenant,
                     subscription=args.subscription,
                     client=args.client,
                     password=args.password,
                     resource_group=args.resourcegrp,
                     resource=args.resource,
                     random_resource=args.randomresource,
                     operation=args.operation,
                     resource_match=args.resourcematch,
                     delay=args.delay)


def main(argv=None, pipeline_class=OperationPipeline) -> int:
    args = parse_args(argv)
    init(args)

    try:
        config = run_config(args)
        plan = operation_plan(config.operation, config.delay)
        if config.delay and not plan.end:
            logger.warning("Ignoring delay %s. Operation %s is a single " \
                           "step.", config.delay, config.operation)
        pipeline = pipeline_class(config, plan, timeout=args.timeout)
        run(pipeline.execute, None)
    except ChaosAzureError as e:
        logger.error(str(e))
        return e.exit_code.value

    return ExitCode.SUCCESS.value
