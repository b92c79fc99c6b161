#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from datetime import timedelta
import os

from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv('.env.sample'))
# If `.env` exists, let it override the sample env file.
load_dotenv(override=True)

BITFINEX_BASE_URL = os.getenv('BITFINEX_BASE_URL',
                              'https://api.bitfinex.com/v2')
LLAMA_BRIDGES_BASE_URL = os.getenv('LLAMA_BRIDGES_BASE_URL',
                                   'https://bridges.llama.fi')
COINGECKO_BASE_URL = os.getenv('COINGECKO_BASE_URL',
                               'https://api.coingecko.com/api/v3')

# Seconds, per upstream HTTP call.
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '10'))

# Freshness of each data source, in seconds.
INFLOW_TIMEOUT = int(os.getenv('INFLOW_TIMEOUT', str(15 * 60)))
BRIDGE_TIMEOUT = int(os.getenv('BRIDGE_TIMEOUT', str(15 * 60)))
SWAP_TIMEOUT = int(os.getenv('SWAP_TIMEOUT', str(6 * 60 * 60)))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

BUCKET_WIDTH = timedelta(minutes=15)
WINDOWS = {
    '1h': timedelta(hours=1),
    '6h': timedelta(hours=6),
    '12h': timedelta(hours=12),
    '24h': timedelta(hours=24),
}

# Chain names as reported by DefiLlama.
DESTINATION_CHAIN = 'Avalanche'
SOLANA = 'Solana'
ETHEREUM = 'Ethereum'

# Venues we read exchange volume from.
EXCHANGES = ['bitfinex']
AVAX_TICKER = 'tAVAXUSD'
