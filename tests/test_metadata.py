from an01studio.config import AppConfig
from an01studio.grid import Grid, to_row
from an01studio.metadata import (
    TenderMetadata,
    apply_row,
    build_rules,
    extract_metadata,
    read_beside,
    read_reference,
)


def test_extract_metadata_reads_every_labelled_field(report_grid):
    metadata = extract_metadata(report_grid)

    assert metadata == TenderMetadata(
        consultation_no="AOO-2024-017",
        description="Fourniture de mobilier de bureau",
        buyer="Ministère X",
        requester="Direction Y",
        technician="M. Dupont",
        decision_date="45292",
        vat_rate=20,
    )


def test_read_beside_takes_right_neighbour():
    assert read_beside(to_row(["Acheteur", "Ministère X"]), "acheteur") == "Ministère X"
    assert read_beside(to_row([None, "Acheteur :", "Mme Martin"]), "acheteur") == "Mme Martin"


def test_read_beside_without_neighbour_returns_default():
    assert read_beside(to_row(["Notes", "Acheteur"]), "acheteur") == ""


def test_read_reference_prefers_tender_reference():
    row = to_row(["Consultation", "voir annexe", "AOO-2023-104"])
    assert read_reference(row, "consultation") == "AOO-2023-104"
    assert read_reference(to_row(["Consultation", "C-42"]), "consultation") == "C-42"


def test_buyer_row_sets_buyer():
    grid = Grid.from_values([["Acheteur", "Ministère X"]])
    assert extract_metadata(grid).buyer == "Ministère X"


def test_keyword_in_last_cell_leaves_field_empty():
    grid = Grid.from_values([["Acheteur"]])
    assert extract_metadata(grid) == TenderMetadata()


def test_first_match_wins():
    grid = Grid.from_values(
        [
            ["Acheteur", "Premier"],
            ["Acheteur", "Second"],
        ]
    )
    assert extract_metadata(grid).buyer == "Premier"


def test_empty_match_lets_later_rows_fill_the_field():
    grid = Grid.from_values(
        [
            ["Demandeur"],
            ["Demandeur", "Service achats"],
        ]
    )
    assert extract_metadata(grid).requester == "Service achats"


def test_scan_is_bounded_to_header_rows():
    rows = [[f"ligne {index}"] for index in range(20)] + [["Valideur", "Trop tard"]]
    assert extract_metadata(Grid.from_values(rows)).technician == ""


def test_fixed_vat_cell_wins_over_labelled_rows():
    rows = [[] for _ in range(9)]
    rows[2] = ["TVA", "5,5 %"]
    rows[8] = ["Taux", None, None, None, None, None, None, "20%"]
    assert extract_metadata(Grid.from_values(rows)).vat_rate == 20


def test_vat_falls_back_to_labelled_row():
    grid = Grid.from_values([["Taux de TVA applicable", 0.1]])
    assert extract_metadata(grid).vat_rate == 10


def test_vat_fallback_skips_non_numeric_cells():
    grid = Grid.from_values([["Taux de TVA", "voir CCAP", "20 %"]])
    assert extract_metadata(grid).vat_rate == 20


def test_unparseable_vat_cell_keeps_fallback_open():
    rows = [[] for _ in range(9)]
    rows[3] = ["TVA", "20%"]
    rows[8] = [None] * 7 + ["n/a"]
    assert extract_metadata(Grid.from_values(rows)).vat_rate == 20


def test_apply_row_returns_new_record():
    rules = build_rules(AppConfig().metadata)
    initial = TenderMetadata()

    updated = apply_row(initial, to_row(["Acheteur", "Ministère X"]), rules, ["tva"])

    assert initial.buyer == ""
    assert updated.buyer == "Ministère X"
    assert apply_row(updated, (), rules, ["tva"]) is updated


def test_custom_keywords_from_config():
    config = AppConfig()
    config.metadata.keywords["buyer"] = ["purchaser"]
    grid = Grid.from_values([["Purchaser", "ACME Corp"], ["Acheteur", "Ignoré"]])

    assert extract_metadata(grid, config).buyer == "ACME Corp"
