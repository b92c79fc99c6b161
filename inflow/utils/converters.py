#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

import re

from werkzeug.routing import BaseConverter, Map
from flask import Flask

from inflow.utils.sources import SOURCES


class SourceConverter(BaseConverter):
    def __init__(self, map: Map) -> None:
        super().__init__(map)
        self.regex = f"(?:{'|'.join([re.escape(x) for x in SOURCES])})"


def register_converter(app: Flask, name: str) -> None:
    func = None

    if name == 'source':
        func = SourceConverter

    if func is None:
        raise TypeError(f'{name} is invalid: no converter found.')

    app.url_map.converters[name] = func
