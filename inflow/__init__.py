#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Any, Mapping, Optional

from flask.json.provider import JSONProvider
from flask import Flask, current_app
import simplejson as json

from inflow.utils.cache import ResultCache


class SimpleJSONProvider(JSONProvider):
    # simplejson renders `Decimal` as a JSON number, not a string.
    def dumps(self, obj: Any, **kwargs: Any) -> str:
        return json.dumps(obj, **kwargs)

    def loads(self, s: Any, **kwargs: Any) -> Any:
        return json.loads(s, **kwargs)


def get_result_cache() -> ResultCache:
    return current_app.extensions['result_cache']


def init(config: Optional[Mapping[str, Any]] = None,
         cache: Optional[ResultCache] = None) -> Flask:
    app = Flask(__name__)
    app.json = SimpleJSONProvider(app)

    if config is not None:
        app.config.from_mapping(config)

    # One cache per process, handed to the views through the app.
    app.extensions['result_cache'] = cache or ResultCache()

    from .utils.converters import register_converter
    register_converter(app, 'source')

    from .routes.api.v1.data import data_bp, legacy_bp
    from .routes.api.v1.utils import utils_bp

    app.register_blueprint(data_bp, url_prefix='/api/v1')
    app.register_blueprint(legacy_bp, url_prefix='/api')
    app.register_blueprint(utils_bp, url_prefix='/api/v1/utils')

    return app
