#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Any, Dict
from decimal import Decimal
from enum import Enum

import requests
import simplejson as json

from inflow.utils.data import COINGECKO_BASE_URL, REQUEST_TIMEOUT
from inflow.utils.errors import UpstreamFetchError
from inflow.utils.helpers import to_decimal


class CoingeckoIDS(Enum):
    AVAX = 'avalanche-2'
    SOL = 'solana'


class Coingecko(object):
    """
    Simple coingecko.com wrapper
    https://www.coingecko.com/en/api/documentation
    """
    def __init__(self,
                 url: str = COINGECKO_BASE_URL,
                 timeout: float = REQUEST_TIMEOUT) -> None:
        self.session = requests.Session()
        self.base = url
        self.timeout = timeout

    def __request(self, method: str, endpoint: str, *args, **kwargs) -> Any:
        try:
            r = self.session.request(method,
                                     self.base + endpoint,
                                     *args,
                                     timeout=self.timeout,
                                     **kwargs)
            r.raise_for_status()
            return json.loads(r.text, use_decimal=True)
        except (requests.RequestException, ValueError) as e:
            raise UpstreamFetchError(f'coingecko {endpoint}: {e}') from e

    def simple_price(self,
                     *ids: CoingeckoIDS,
                     currency: str = 'usd') -> Dict[CoingeckoIDS, Decimal]:
        """
        Schema:
        {
            "solana": {"usd": 143.12},
            "avalanche-2": {"usd": 28.4}
        }
        """
        ret = self.__request('GET',
                             '/simple/price',
                             params={
                                 'ids': ','.join(x.value for x in ids),
                                 'vs_currencies': currency,
                             })
        res: Dict[CoingeckoIDS, Decimal] = {}

        for x in ids:
            try:
                price = to_decimal(ret[x.value][currency])
            except (KeyError, TypeError, ValueError) as e:
                raise UpstreamFetchError(f'no {currency} price for {x}') from e

            if price <= 0:
                raise UpstreamFetchError(f'non positive price for {x}')

            res[x] = price

        return res
