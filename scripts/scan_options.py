#!/usr/bin/env python
"""
Rank option contracts by edge over their Black-Scholes value.

This script is a thin wrapper around:
    option_scanner.apps.scan.main

Typical usage:
    python scripts/scan_options.py --symbols "AAPL, MSFT" --min-edge 3
    python scripts/scan_options.py --config config/scan.yml --provider yfinance
"""

from option_scanner.apps.scan import main

if __name__ == "__main__":
    main()
