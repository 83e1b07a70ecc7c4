# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import pathlib
import functools
import json


underbar_folder: pathlib.Path = pathlib.Path.home() / '.underbar'
config_path: pathlib.Path = underbar_folder / 'config.json'
default_logs_folder: pathlib.Path = underbar_folder / 'logs'


@functools.cache
def read_config() -> dict:
    try:
        content = config_path.read_text()
    except FileNotFoundError:
        return {}
    return json.loads(content)


def get_logs_folder() -> pathlib.Path:
    config = read_config()
    if 'logs_path' in config:
        return pathlib.Path(config['logs_path']).expanduser()
    else:
        return default_logs_folder


def get_default_log_to_file() -> bool:
    return bool(read_config().get('log_to_file', False))
