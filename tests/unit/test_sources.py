import logging

from openpyxl import Workbook
from glossary_extractor.sources import open_source

def _write_xlsx(tmp_path, name, rows, extra_sheets=0):
    p = tmp_path / name
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    for i in range(extra_sheets):
        wb.create_sheet(f"Extra{i}")
    wb.save(p)
    return str(p)

def _write_csv(tmp_path, name, text, encoding="utf-8"):
    p = tmp_path / name
    p.write_text(text, encoding=encoding, newline="\n")
    return str(p)

def _drain(reader):
    rows = []
    while reader.has_more():
        rows.append(reader.read_next())
    return rows

def test_xlsx_header_and_rows_as_text(tmp_path):
    path = _write_xlsx(tmp_path, "dict.xlsx", [
        ["stringID", "EN"],
        ["id1", "Hello"],
        ["id2", 42],
        ["id3", None],
    ])
    ok, err, source = open_source(path)
    assert ok is True
    assert err is None
    assert source.name == "dict.xlsx"
    assert list(source.header) == ["stringID", "EN"]
    assert _drain(source.reader) == [("id1", "Hello"), ("id2", "42"), ("id3", "")]

def test_xlsx_warns_about_extra_sheets(tmp_path, caplog):
    path = _write_xlsx(tmp_path, "multi.xlsx", [["stringID", "EN"], ["a", "b"]], extra_sheets=2)
    with caplog.at_level(logging.WARNING, logger="glossary_extractor.sources"):
        ok, _, source = open_source(path)
    assert ok is True
    assert "Only the first sheet" in caplog.text
    assert _drain(source.reader) == [("a", "b")]

def test_xlsx_empty_sheet_is_an_error(tmp_path):
    path = _write_xlsx(tmp_path, "empty.xlsx", [])
    ok, err, source = open_source(path)
    assert ok is False
    assert "row 1 must hold the column headers" in err
    assert source is None

def test_header_only_means_no_data_rows(tmp_path):
    path = _write_xlsx(tmp_path, "header_only.xlsx", [["stringID", "EN"]])
    ok, _, source = open_source(path)
    assert ok is True
    assert source.reader.has_more() is False

def test_csv_with_bom_and_blank_lines(tmp_path):
    path = _write_csv(tmp_path, "dict.csv", "stringID,EN\nid1,Hello\n,\nid2,\"Bye, now\"\n", encoding="utf-8-sig")
    ok, _, source = open_source(path)
    assert ok is True
    assert list(source.header) == ["stringID", "EN"]   # BOM stripped from the first header
    assert _drain(source.reader) == [("id1", "Hello"), ("id2", "Bye, now")]

def test_missing_file(tmp_path):
    ok, err, source = open_source(str(tmp_path / "missing.xlsx"))
    assert ok is False
    assert err.startswith("File not found")
    assert source is None

def test_corrupt_workbook(tmp_path):
    p = tmp_path / "broken.xlsx"
    p.write_bytes(b"this is not a zip file")
    ok, err, source = open_source(str(p))
    assert ok is False
    assert err.startswith("Could not read")
    assert source is None

def test_unsupported_extension(tmp_path):
    p = tmp_path / "dict.txt"
    p.write_text("stringID\tEN\n", encoding="utf-8")
    ok, err, _ = open_source(str(p))
    assert ok is False
    assert "Unsupported file type" in err

def test_blank_first_row_is_reported_as_blank_not_empty(tmp_path):
    path = _write_csv(tmp_path, "shifted.csv", ",\nstringID,EN\na,b\n")
    ok, err, source = open_source(path)
    assert ok is False
    assert err.startswith("Row 1 of")
    assert "is blank" in err
    assert "is empty" not in err
    assert source is None

def test_empty_csv_is_reported_as_empty(tmp_path):
    path = _write_csv(tmp_path, "empty.csv", "")
    ok, err, _ = open_source(path)
    assert ok is False
    assert "is empty" in err
