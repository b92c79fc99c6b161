#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from collections import defaultdict

from flask import Blueprint, current_app, jsonify

from inflow.utils.data import BUCKET_WIDTH, WINDOWS
from inflow.utils.windows import bucket_count
from inflow.utils.sources import SOURCES
from inflow import get_result_cache

utils_bp = Blueprint('utils_bp', __name__)


# Something a bit more internal, but useful for checking how old the data
# each source serves is.
@utils_bp.route('/status', methods=['GET'])
def status():
    cache = get_result_cache()
    res = defaultdict(dict)

    for key, source in SOURCES.items():
        timeout = current_app.config.get(source.config_key, source.timeout)
        entry = cache.peek(key)

        res[key] = {
            'cached': entry is not None,
            'fresh': cache.is_fresh(entry, timeout),
            'age': cache.age(key),
            'timeout': timeout,
        }

    return jsonify(res)


@utils_bp.route('/sources', methods=['GET'])
def sources():
    return jsonify({
        'sources': list(SOURCES),
        'bucket_width': int(BUCKET_WIDTH.total_seconds()),
        'windows': {k: bucket_count(v)
                    for k, v in WINDOWS.items()},
    })
