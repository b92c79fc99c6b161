#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from functools import partial
from decimal import Decimal
import logging
import random

from inflow.utils.aggregate import (RawEvent, aggregate_windows, from_source,
                                    total_of)
from inflow.utils.data import (AVAX_TICKER, DESTINATION_CHAIN, ETHEREUM,
                               EXCHANGES, SOLANA)
from inflow.utils.analytics.mock import DAY, synthetic_events, synthetic_price
from inflow.utils.wrappa.llama import DefiLlamaBridges, transfers_to_events
from inflow.utils.wrappa.bitfinex import Bitfinex
from inflow.utils.windows import build_buckets
from inflow.utils.helpers import fan_out

logger = logging.getLogger(__name__)

bitfinex = Bitfinex()
llama = DefiLlamaBridges()

CLASSIFIERS = {
    'exchangeAmount': from_source(*EXCHANGES),
    'solBridgeAmount': from_source(SOLANA),
    'ethBridgeAmount': from_source(ETHEREUM),
}
DERIVED = {
    'totalInflow':
    total_of('exchangeAmount', 'solBridgeAmount', 'ethBridgeAmount'),
}


def spread_volume(venue: str, volume: Decimal,
                  now: datetime) -> List[RawEvent]:
    """
    Exchanges only hand us a rolling 24h volume, so split it evenly across
    the buckets of the last day, one event at the start of each bucket.
    """
    buckets = build_buckets(now, DAY)
    share = volume / len(buckets)

    return [RawEvent(x.start, venue, share) for x in buckets]


def get_inflow_data(now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)

    ret = fan_out(
        ticker=partial(bitfinex.ticker, AVAX_TICKER),
        transfers=partial(llama.recent_transfers, DESTINATION_CHAIN),
    )
    ticker = ret['ticker']

    events = transfers_to_events(ret['transfers'])
    events += spread_volume(EXCHANGES[0], ticker.volume, now)
    logger.info(f'aggregating {len(events)} inflow events')

    res: Dict[str, Any] = aggregate_windows(events, now, CLASSIFIERS, DERIVED)
    res['avaxPrice'] = ticker.last_price

    return res


def mock_inflow_data(now: Optional[datetime] = None,
                     rng: Optional[random.Random] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()

    events = synthetic_events(now, {
        EXCHANGES[0]: 1000,
        SOLANA: 200,
        ETHEREUM: 300,
    }, rng)

    res: Dict[str, Any] = aggregate_windows(events, now, CLASSIFIERS, DERIVED)
    # AVAX between $20 and $30.
    res['avaxPrice'] = synthetic_price(rng, 20, 30)

    return res
