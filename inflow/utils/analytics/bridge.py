#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from functools import partial
from decimal import Decimal
import random

from inflow.utils.aggregate import (Deriver, aggregate_windows, from_source,
                                    scaled, total_of)
from inflow.utils.data import AVAX_TICKER, DESTINATION_CHAIN, ETHEREUM, SOLANA
from inflow.utils.analytics.mock import synthetic_events, synthetic_price
from inflow.utils.wrappa.llama import DefiLlamaBridges, transfers_to_events
from inflow.utils.wrappa.bitfinex import Bitfinex
from inflow.utils.helpers import fan_out

bitfinex = Bitfinex()
llama = DefiLlamaBridges()

CLASSIFIERS = {
    'solBridgeAmount': from_source(SOLANA),
    'ethBridgeAmount': from_source(ETHEREUM),
}


def derived(avax_price: Decimal) -> Dict[str, Deriver]:
    # Transfers are denominated in AVAX once they land on Avalanche.
    return {
        'totalBridgeAmount': total_of('solBridgeAmount', 'ethBridgeAmount'),
        'usdValue': scaled('totalBridgeAmount', avax_price),
    }


def get_bridge_data(now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)

    ret = fan_out(
        ticker=partial(bitfinex.ticker, AVAX_TICKER),
        transfers=partial(llama.recent_transfers, DESTINATION_CHAIN),
    )
    price = ret['ticker'].last_price

    res: Dict[str, Any] = aggregate_windows(
        transfers_to_events(ret['transfers']), now, CLASSIFIERS,
        derived(price))
    res['avaxPrice'] = price

    return res


def mock_bridge_data(now: Optional[datetime] = None,
                     rng: Optional[random.Random] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()

    price = synthetic_price(rng, 20, 30)
    events = synthetic_events(now, {SOLANA: 200, ETHEREUM: 300}, rng)

    res: Dict[str, Any] = aggregate_windows(events, now, CLASSIFIERS,
                                            derived(price))
    res['avaxPrice'] = price

    return res
