from __future__ import annotations


def test_demo_runs_every_trade(capsys) -> None:
    from tools.offline_trade_demo import main

    assert main([]) == 0
    out = capsys.readouterr().out
    for name in ("LogBuyPrimary", "LogSellPrimary", "LogSoftSellPrimary", "LogBuySecondary", "LogSellSecondary"):
        assert name in out
    assert "[offline-demo] OK" in out


def test_demo_reads_yaml_config(tmp_path, capsys) -> None:
    from tools.offline_trade_demo import main

    cfg = tmp_path / "exchange.yaml"
    cfg.write_text("exchange_account: demo-pool\nprimary_funding_num: 1\nprimary_funding_den: 2\n", encoding="utf-8")
    assert main(["--config", str(cfg)]) == 0
    assert "[offline-demo] OK" in capsys.readouterr().out
