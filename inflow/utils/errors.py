#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""


class UpstreamFetchError(Exception):
    """
    An external price / bridge / exchange call failed or returned junk.
    """


class InvalidWindowError(ValueError):
    """
    Window key is unknown, or its duration does not split into buckets.
    """


class EmptyCacheError(LookupError):
    # Internal, the routes always hand the cache a fallback.
    pass
