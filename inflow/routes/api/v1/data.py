#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify

from inflow.utils.windows import parse_window
from inflow.utils.errors import InvalidWindowError
from inflow.utils.sources import SOURCES, serve
from inflow.utils.cache import CacheEntry
from inflow.utils.data import WINDOWS
from inflow import get_result_cache

data_bp = Blueprint('data_bp', __name__)
# Paths the dashboard widgets poll.
legacy_bp = Blueprint('legacy_bp', __name__)


def _serve(source: str) -> CacheEntry:
    _source = SOURCES[source]
    return serve(get_result_cache(), _source,
                 current_app.config.get(_source.config_key))


def _degraded(source: str, entry: CacheEntry) -> Dict[str, Any]:
    if entry.error is None:
        return {}

    return {'error': f'failed to fetch {source} data', 'details': entry.error}


@data_bp.route('/<source:source>', methods=['GET'])
def source_data(source: str):
    entry = _serve(source)
    return jsonify({**entry.data, **_degraded(source, entry)})


@data_bp.route('/<source:source>/<window>', methods=['GET'])
def source_window(source: str, window: str):
    try:
        parse_window(window)
    except InvalidWindowError:
        return (jsonify({
            'error': 'invalid window',
            'valids': list(WINDOWS),
        }), 400)

    entry = _serve(source)
    return jsonify({
        'window': window,
        'data': entry.data[window],
        **_degraded(source, entry),
    })


legacy_bp.add_url_rule('/avax-inflow-data',
                       'inflow',
                       source_data,
                       defaults={'source': 'inflow'},
                       methods=['GET'])
legacy_bp.add_url_rule('/bridge-data',
                       'bridge',
                       source_data,
                       defaults={'source': 'bridge'},
                       methods=['GET'])
legacy_bp.add_url_rule('/swap_data',
                       'swap',
                       source_data,
                       defaults={'source': 'swap'},
                       methods=['GET'])
