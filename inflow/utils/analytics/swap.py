#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from functools import partial
from decimal import Decimal
import random

from inflow.utils.aggregate import (Deriver, RawEvent, aggregate_windows,
                                    from_source, scaled)
from inflow.utils.analytics.mock import synthetic_events, synthetic_price
from inflow.utils.wrappa.llama import DefiLlamaBridges, transfers_to_events
from inflow.utils.wrappa.coingecko import Coingecko, CoingeckoIDS
from inflow.utils.data import DESTINATION_CHAIN, SOLANA
from inflow.utils.helpers import fan_out

coingecko = Coingecko()
llama = DefiLlamaBridges()

CLASSIFIERS = {
    'amount': from_source(SOLANA),
}


def derived(avax_price: Decimal) -> Dict[str, Deriver]:
    return {'usdValue': scaled('amount', avax_price)}


def sol_to_avax(events: List[RawEvent], sol_price: Decimal,
                avax_price: Decimal) -> List[RawEvent]:
    """
    Re-denominate SOL amounts into the AVAX they swap into at spot.
    """
    rate = sol_price / avax_price
    return [x._replace(amount=x.amount * rate) for x in events]


def get_swap_data(now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)

    ret = fan_out(
        prices=partial(coingecko.simple_price, CoingeckoIDS.SOL,
                       CoingeckoIDS.AVAX),
        transfers=partial(llama.recent_transfers, DESTINATION_CHAIN),
    )
    sol_price = ret['prices'][CoingeckoIDS.SOL]
    avax_price = ret['prices'][CoingeckoIDS.AVAX]

    events = [
        x for x in transfers_to_events(ret['transfers']) if x.source == SOLANA
    ]

    res: Dict[str, Any] = aggregate_windows(
        sol_to_avax(events, sol_price, avax_price), now, CLASSIFIERS,
        derived(avax_price))
    res['solPrice'] = sol_price
    res['avaxPrice'] = avax_price

    return res


def mock_swap_data(now: Optional[datetime] = None,
                   rng: Optional[random.Random] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()

    sol_price = synthetic_price(rng, 100, 200)
    avax_price = synthetic_price(rng, 20, 30)
    events = synthetic_events(now, {SOLANA: 100}, rng)

    res: Dict[str, Any] = aggregate_windows(
        sol_to_avax(events, sol_price, avax_price), now, CLASSIFIERS,
        derived(avax_price))
    res['solPrice'] = sol_price
    res['avaxPrice'] = avax_price

    return res
