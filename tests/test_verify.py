"""
Tests for the self-check routines and the run_checks.py entry point.
"""

import numpy as np
import pandas as pd
import pytest
import yaml

from primekit.verify import (
    prime_flags_upto,
    run_all_checks,
    verify_factorization,
    verify_mask,
    verify_mersenne,
    verify_search,
    verify_sieve,
)
from run_checks import main

SMALL_CONFIG = {
    'sieve_lo': 1,
    'sieve_hi': 5000,
    'factor_samples': 10,
    'factor_bits': 48,
    'search_samples': 10,
    'mersenne_exponents': [3, 5, 7, 11, 13],
    'reps': 25,
    'seed': 7,
}


class TestPrimeFlags:
    """Test the plain-sieve oracle."""

    def test_known_primes(self):
        """25 primes up to 100, 0 and 1 not prime."""
        flags = prime_flags_upto(100)
        assert np.sum(flags) == 25
        assert not flags[0]
        assert not flags[1]
        assert flags[97]


class TestChecks:
    """Each check passes on a correct kernel."""

    def test_sieve(self):
        result = verify_sieve(1, 20000, verbose=False)
        assert result['passed']
        assert result['cases'] == 20000

    def test_sieve_offset(self):
        result = verify_sieve(1000, 3000, verbose=False)
        assert result['passed']

    def test_mask(self):
        result = verify_mask(1, 3000, verbose=False)
        assert result['passed']
        assert result['cases'] == 3000

    def test_factorization(self):
        result = verify_factorization(20, 64, seed=1, verbose=False)
        assert result['passed']
        assert result['failures'] == 0

    def test_search(self):
        result = verify_search(20, seed=1, verbose=False)
        assert result['passed']

    def test_mersenne(self, capsys):
        """Lucas-Lehmer agrees with Miller-Rabin, one line per exponent."""
        result = verify_mersenne([3, 11, 13], verbose=True)
        assert result['passed']
        out = capsys.readouterr().out
        assert "2^11 - 1: composite ✓" in out
        assert "2^13 - 1: prime ✓" in out


class TestRunAllChecks:
    """Test the combined summary table."""

    def test_summary_frame(self):
        df = run_all_checks(SMALL_CONFIG, verbose=False)
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['check', 'passed', 'cases', 'failures', 'seconds']
        assert list(df['check']) == ['sieve', 'mask', 'factorization', 'search', 'mersenne']
        assert df['passed'].all()


class TestMain:
    """Test the command-line runner."""

    def test_writes_summary(self, tmp_path, capsys):
        """A passing run exits 0 and writes checks.csv."""
        config = dict(SMALL_CONFIG, output_dir=str(tmp_path / 'out'))
        path = tmp_path / 'checks.yaml'
        path.write_text(yaml.safe_dump(config))

        assert main(['--config', str(path), '--quiet']) == 0

        summary = pd.read_csv(tmp_path / 'out' / 'checks.csv')
        assert len(summary) == 5
        assert summary['passed'].all()
        assert "SUMMARY" in capsys.readouterr().out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
