"""Tests for the dev tunnel gateway and its output parsers."""

from __future__ import annotations

import pytest

from tunnel_watchdog.exceptions import BashCommandError, ProcessLaunchError
from tunnel_watchdog.tunnel import (
    TunnelGateway,
    TunnelId,
    count_connections,
    resolve_tunnel_id,
)


class TestTunnelId:
    """TunnelId value semantics."""

    def test_equality_is_string_equality(self) -> None:
        assert TunnelId("abc") == TunnelId("abc")
        assert TunnelId("abc") != TunnelId("abd")

    def test_ordering_is_string_ordering(self) -> None:
        assert sorted([TunnelId("b"), TunnelId("a")]) == [TunnelId("a"), TunnelId("b")]

    def test_str_returns_raw_value(self) -> None:
        assert str(TunnelId("quiet-lake.euw")) == "quiet-lake.euw"

    def test_is_hashable(self) -> None:
        assert len({TunnelId("a"), TunnelId("a")}) == 1


class TestResolveTunnelId:
    """resolve_tunnel_id parsing rules."""

    def test_resolves_id_from_real_listing(self, tunnel_listing: str, tunnel_id: str) -> None:
        assert resolve_tunnel_id(tunnel_listing) == TunnelId(tunnel_id)

    def test_takes_text_before_first_space_of_last_line(self) -> None:
        assert resolve_tunnel_id("header line\nabc123 extra stuff") == TunnelId("abc123")

    def test_ignores_trailing_empty_lines(self) -> None:
        assert resolve_tunnel_id("abc123 extra stuff\n\n\n") == TunnelId("abc123")

    def test_uses_last_of_several_tunnels(self) -> None:
        listing = "first-tunnel 1 x\nsecond-tunnel 0 y\n"

        assert resolve_tunnel_id(listing) == TunnelId("second-tunnel")

    def test_empty_text_returns_none(self) -> None:
        assert resolve_tunnel_id("") is None

    @pytest.mark.parametrize("listing", ["\n", "\n\n\n"])
    def test_only_empty_lines_returns_none(self, listing: str) -> None:
        assert resolve_tunnel_id(listing) is None

    def test_whitespace_only_last_line_returns_none(self) -> None:
        assert resolve_tunnel_id("abc123 x\n   \t") is None

    def test_last_line_without_space_returns_none(self) -> None:
        assert resolve_tunnel_id("abc123 x\nno-space-here\n") is None

    def test_leading_space_gives_blank_id(self) -> None:
        assert resolve_tunnel_id(" abc123 extra") is None


class TestCountConnections:
    """count_connections parsing rules."""

    def test_zero_connections(self, make_show_output) -> None:
        assert count_connections(make_show_output(0)) == 0

    def test_three_connections(self, make_show_output) -> None:
        assert count_connections(make_show_output(3)) == 3

    def test_empty_report_is_zero(self) -> None:
        assert count_connections("") == 0

    def test_missing_line_is_zero(self) -> None:
        assert count_connections("Tunnel ID : abc\nHost connections : 1\n") == 0

    def test_spacing_must_match_exactly(self) -> None:
        assert count_connections("Client connections : 4") == 0

    def test_non_numeric_count_is_zero(self) -> None:
        assert count_connections("Client connections    : many") == 0


class TestTunnelGateway:
    """TunnelGateway command construction and failure wrapping."""

    def test_list_tunnels_runs_listing_command(self, make_runner, tunnel_listing: str) -> None:
        runner = make_runner({"devtunnel list": tunnel_listing})

        output = TunnelGateway(runner).list_tunnels()

        assert output == tunnel_listing
        assert runner.commands == ["devtunnel list"]

    def test_list_tunnels_empty_output_raises(self, make_runner) -> None:
        runner = make_runner({"devtunnel list": ""})

        with pytest.raises(BashCommandError) as exc_info:
            TunnelGateway(runner).list_tunnels()

        assert exc_info.value.context == "list tunnels"

    def test_list_tunnels_launch_failure_is_wrapped(self, make_runner) -> None:
        cause = ProcessLaunchError("devtunnel list", "no shell")
        runner = make_runner({"devtunnel list": cause})

        with pytest.raises(BashCommandError) as exc_info:
            TunnelGateway(runner).list_tunnels()

        assert exc_info.value.context == "list tunnels"
        assert exc_info.value.__cause__ is cause

    def test_show_tunnel_includes_id(self, make_runner, make_show_output) -> None:
        runner = make_runner({"devtunnel show abc123": make_show_output(2)})

        output = TunnelGateway(runner).show_tunnel(TunnelId("abc123"))

        assert count_connections(output) == 2
        assert runner.commands == ["devtunnel show abc123"]

    def test_show_tunnel_empty_output_is_not_an_error(self, make_runner) -> None:
        runner = make_runner({"devtunnel show abc123": ""})

        assert TunnelGateway(runner).show_tunnel(TunnelId("abc123")) == ""

    def test_show_tunnel_launch_failure_is_wrapped(self, make_runner) -> None:
        runner = make_runner({"devtunnel show abc123": ProcessLaunchError("devtunnel show abc123", "boom")})

        with pytest.raises(BashCommandError) as exc_info:
            TunnelGateway(runner).show_tunnel(TunnelId("abc123"))

        assert exc_info.value.context == "show tunnel abc123"
        assert str(exc_info.value).startswith("Unable to show tunnel abc123")
