"""Tests for the eth_call based pair reader."""

import asyncio

import pytest

from estimator.constants import GET_RESERVES_SELECTOR, TOKEN0_SELECTOR, TOKEN1_SELECTOR
from estimator.errors import PairReadFailed
from estimator.models.estimate import PairReserves, PairTokens
from estimator.readers.web3_reader import Web3PairReader
from tests.helpers import USDC, USDC_WETH_PAIR, WETH, FakeWeb3


def make_reader(call_timeout: float = 1.0, **kwargs) -> tuple[Web3PairReader, FakeWeb3]:
    w3 = FakeWeb3(**kwargs)
    return Web3PairReader(w3, call_timeout=call_timeout), w3


class TestTokens:
    """Tests for Web3PairReader.tokens()."""

    def test_decodes_tokens(self):
        """token0 and token1 are decoded and normalized to lowercase."""
        reader, w3 = make_reader(token0=USDC, token1=WETH)
        tokens = asyncio.run(reader.tokens(USDC_WETH_PAIR))
        assert tokens == PairTokens(token0=USDC, token1=WETH)

        selectors = sorted(call["data"] for call in w3.eth.calls)
        assert selectors == sorted([TOKEN0_SELECTOR, TOKEN1_SELECTOR])
        assert all(call["to"].lower() == USDC_WETH_PAIR for call in w3.eth.calls)

    def test_calls_target_checksum_address(self):
        """The pool address is sent in checksum form."""
        reader, w3 = make_reader(token0=USDC, token1=WETH)
        asyncio.run(reader.tokens(USDC_WETH_PAIR))
        assert w3.eth.calls[0]["to"] == "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"

    def test_token_calls_are_concurrent(self):
        """Neither token call completes until both have started."""
        reader, w3 = make_reader(token0=USDC, token1=WETH)
        w3.eth.rendezvous = {TOKEN0_SELECTOR, TOKEN1_SELECTOR}
        tokens = asyncio.run(reader.tokens(USDC_WETH_PAIR))
        assert tokens.token0 == USDC

    def test_one_call_fails(self):
        """A single failed call fails the whole read."""
        reader, w3 = make_reader(token0=USDC, token1=WETH)
        w3.eth.errors[TOKEN1_SELECTOR] = ConnectionError("connection reset by peer")

        with pytest.raises(PairReadFailed) as exc_info:
            asyncio.run(reader.tokens(USDC_WETH_PAIR))

        message = str(exc_info.value)
        assert "failed to get pair tokens" in message
        assert "token1: connection reset by peer" in message
        assert isinstance(exc_info.value.__cause__, ExceptionGroup)

    def test_both_calls_fail(self):
        """Both failure messages survive aggregation."""
        reader, w3 = make_reader()
        w3.eth.errors[TOKEN0_SELECTOR] = ConnectionError("connection reset by peer")
        w3.eth.errors[TOKEN1_SELECTOR] = ConnectionError("broken pipe")

        with pytest.raises(PairReadFailed) as exc_info:
            asyncio.run(reader.tokens(USDC_WETH_PAIR))

        message = str(exc_info.value)
        assert "token0: connection reset by peer" in message
        assert "token1: broken pipe" in message
        assert len(exc_info.value.__cause__.exceptions) == 2

    def test_undecodable_token(self):
        """Short return data is a read failure, not a crash."""
        reader, w3 = make_reader(token0=USDC, token1=WETH)
        w3.eth.responses[TOKEN0_SELECTOR] = b""

        with pytest.raises(PairReadFailed, match="token0"):
            asyncio.run(reader.tokens(USDC_WETH_PAIR))

    def test_call_timeout(self):
        """A call slower than call_timeout fails the read with a timeout message."""
        reader, w3 = make_reader(call_timeout=0.05, token0=USDC, token1=WETH)
        w3.eth.delays[TOKEN0_SELECTOR] = 5.0

        with pytest.raises(PairReadFailed, match="token0: timed out after 0.05s"):
            asyncio.run(reader.tokens(USDC_WETH_PAIR))


class TestReserves:
    """Tests for Web3PairReader.reserves()."""

    def test_decodes_reserves(self):
        """getReserves output is decoded, ignoring the timestamp."""
        reader, w3 = make_reader(reserves=(50_000_000_000_000, 20_000 * 10**18))
        reserves = asyncio.run(reader.reserves(USDC_WETH_PAIR))
        assert reserves == PairReserves(reserve0=50_000_000_000_000, reserve1=20_000 * 10**18)
        assert [call["data"] for call in w3.eth.calls] == [GET_RESERVES_SELECTOR]

    def test_uint112_max(self):
        """Largest possible reserves decode exactly."""
        max_reserve = 2**112 - 1
        reader, _ = make_reader(reserves=(max_reserve, 0))
        assert asyncio.run(reader.reserves(USDC_WETH_PAIR)) == PairReserves(max_reserve, 0)

    def test_transport_error(self):
        """Transport errors become PairReadFailed with the cause attached."""
        reader, w3 = make_reader(reserves=(1, 1))
        w3.eth.errors[GET_RESERVES_SELECTOR] = ConnectionError("node unavailable")

        with pytest.raises(PairReadFailed, match="getReserves: node unavailable") as exc_info:
            asyncio.run(reader.reserves(USDC_WETH_PAIR))
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_short_output(self):
        """Output too short for getReserves is a decode failure."""
        reader, w3 = make_reader()
        w3.eth.responses[GET_RESERVES_SELECTOR] = b"\x00" * 32

        with pytest.raises(PairReadFailed, match="cannot decode 32 bytes"):
            asyncio.run(reader.reserves(USDC_WETH_PAIR))

    def test_timeout(self):
        """A slow getReserves fails with a timeout message."""
        reader, w3 = make_reader(call_timeout=0.05, reserves=(1, 1))
        w3.eth.delays[GET_RESERVES_SELECTOR] = 5.0

        with pytest.raises(PairReadFailed, match="timed out after 0.05s"):
            asyncio.run(reader.reserves(USDC_WETH_PAIR))


class TestFromUrl:
    """Tests for reader construction."""

    def test_from_url(self):
        """from_url builds an AsyncWeb3-backed reader without connecting."""
        reader = Web3PairReader.from_url("http://localhost:8545", call_timeout=2.5)
        assert reader.call_timeout == 2.5
        assert hasattr(reader.w3, "eth")
