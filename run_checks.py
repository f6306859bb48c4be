#!/usr/bin/env python3
"""
Self-check script.

Cross-checks the sieve, primality test, factorizer, prime search and
Lucas-Lehmer test against independent oracles and writes a summary table.

Usage:
    python run_checks.py
    python run_checks.py --config config/custom.yaml
"""

import argparse
import sys
import time
from pathlib import Path

from primekit.config import load_config
from primekit.verify import run_all_checks


def main(argv=None):
    parser = argparse.ArgumentParser(description='Run all primekit self-checks')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to YAML config file (defaults built in)')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the summary table')
    args = parser.parse_args(argv)

    config = load_config(args.config)
    verbose = not args.quiet

    print("=" * 60)
    print("primekit - Self-Check Suite")
    print("=" * 60)
    if verbose:
        print(f"\nConfiguration:")
        print(f"  sieve range = [{config['sieve_lo']:,}, {config['sieve_hi']:,}]")
        print(f"  factor_samples = {config['factor_samples']} x {config['factor_bits']} bits")
        print(f"  search_samples = {config['search_samples']}")
        print(f"  reps = {config['reps']}")
        print(f"  seed = {config['seed']}")

    total_start = time.time()
    df = run_all_checks(config, verbose)
    total_time = time.time() - total_start

    output_dir = Path(config['output_dir'])
    output_dir.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_dir / 'checks.csv', index=False)

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(df.to_string(index=False))
    print(f"\nTotal runtime: {total_time:.1f}s")
    print(f"Summary saved to: {(output_dir / 'checks.csv').absolute()}")

    return 0 if df['passed'].all() else 1


if __name__ == '__main__':
    sys.exit(main())
