# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import json
import random
import platform
import sys
import contextlib
import logging
import threading
from typing import Any, Optional, Tuple

import click

from . import logging_setup
from . import constants
from .objecting import extend, defaults
from .delaying import delay
from .shuffling import shuffle

logger = logging.getLogger(__name__)


class JsonObjectParamType(click.ParamType):
    name = 'json_object'

    def convert(self, value: Any, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> dict:
        if isinstance(value, dict):
            return value
        try:
            object_ = json.loads(value)
        except json.JSONDecodeError:
            self.fail(f'{value!r} is not valid JSON.', param, ctx)
        if not isinstance(object_, dict):
            self.fail(f'{value!r} is not a JSON object.', param, ctx)
        return object_

JSON_OBJECT = JsonObjectParamType()


@click.group()
@click.option('-v', '--verbose', is_flag=True)
@click.option('--log-to-file/--dont-log-to-file', default=None)
def underbar_command_group(*, verbose: bool = False, log_to_file: Optional[bool] = None) -> None:
    from underbar import __version__
    if log_to_file is None:
        log_to_file = constants.get_default_log_to_file()
    logging_setup.setup(verbose=verbose, log_to_file=log_to_file)
    logger.debug(f'Starting underbar {__version__}, Python version {platform.python_version()}')
    logger.debug(f'{sys.argv=}')

@underbar_command_group.result_callback()
def underbar_done(result: Any, *, verbose: bool = False,
                  log_to_file: Optional[bool] = None) -> None:
    logger.debug(f'underbar finished, exiting.')


@underbar_command_group.command('extend')
@click.argument('target', type=JSON_OBJECT)
@click.argument('sources', type=JSON_OBJECT, nargs=-1)
def extend_command(*, target: dict, sources: Tuple[dict, ...]) -> None:
    '''Merge the SOURCES JSON objects into TARGET, later ones overriding earlier ones.'''
    click.echo(json.dumps(extend(target, *sources)))


@underbar_command_group.command('defaults')
@click.argument('target', type=JSON_OBJECT)
@click.argument('sources', type=JSON_OBJECT, nargs=-1)
def defaults_command(*, target: dict, sources: Tuple[dict, ...]) -> None:
    '''Fill in the keys missing from the TARGET JSON object from the SOURCES JSON objects.'''
    click.echo(json.dumps(defaults(target, *sources)))


@underbar_command_group.command('shuffle')
@click.option('--seed', type=int, default=None)
@click.argument('items', nargs=-1)
def shuffle_command(*, seed: Optional[int], items: Tuple[str, ...]) -> None:
    '''Print ITEMS in a random order, one per line.'''
    random_generator = random.Random(seed) if seed is not None else None
    for item in shuffle(items, random_generator=random_generator):
        click.echo(item)


@underbar_command_group.command('delay')
@click.option('--wait-ms', type=click.FloatRange(min=0), default=1000, show_default=True)
@click.argument('message')
def delay_command(*, wait_ms: float, message: str) -> None:
    '''Print MESSAGE after waiting WAIT_MS milliseconds.'''
    done_event = threading.Event()

    def echo_message() -> None:
        try:
            click.echo(message)
        finally:
            done_event.set()

    delay(echo_message, wait_ms)
    done_event.wait()

####################################################################################################


@contextlib.contextmanager
def run_and_log_exception():
    try:
        yield
    except (SystemExit, click.exceptions.Exit):
        raise
    except BaseException as base_exception:
        logger.exception('underbar exited because of an exception.')
        raise SystemExit(1) from base_exception


def underbar(*args: Any, **kwargs: Any) -> None:
    with run_and_log_exception():
        underbar_command_group(*args, **kwargs)
