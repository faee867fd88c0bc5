import json

import pytest

from layout_report import main


def test_default_report_fits(capsys):
    main(["--paper", "A4"])
    out = capsys.readouterr().out
    assert "Paper:     A4 (210.0mm, margin 12.0mm)" in out
    assert "sku" in out
    assert "Total:     660px" in out
    assert "fits the printable width" in out


def test_json_report_flags_overflow(capsys):
    columns = "sku,ctSize,ctn,pcs,rp,tp,tpVal,tradeOffer,slabDisc,grossValue,others,getValue,advanceTax,gst"
    main(["--paper", "A4", "--font-size", "12", "--columns", columns, "--json"])
    body = json.loads(capsys.readouterr().out)
    assert body["overflows"] is True
    assert body["font_size_px"] == 12
    assert body["widths"]["sku"] == 107


def test_bad_paper_size_exits():
    with pytest.raises(SystemExit, match="Unknown paper size"):
        main(["--paper", "B5"])
