"""Tests for loading p-values from delimited text files."""

import numpy as np
import pytest

from pvalue_plotter.csv_parser import load_pvalue_csv


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return str(path)


def test_single_column_with_header(tmp_path):
    path = _write(tmp_path, "screen.csv", "p_value\n0.01\n0.5\n1e-05\n")
    collection = load_pvalue_csv(path)
    assert collection.labels == ['screen']
    sample = collection.get('screen')
    np.testing.assert_allclose(sample.pvalues, [0.01, 0.5, 1e-05])
    assert sample.source == path
    assert collection.source_files == {'screen': path}


def test_single_column_without_header(tmp_path):
    path = _write(tmp_path, "raw.txt", "0.2\n0.3\n")
    assert load_pvalue_csv(path).get('raw').n_tests == 2


def test_long_form_keeps_first_seen_label_order(tmp_path):
    path = _write(tmp_path, "long.csv", (
        "label,p_value\n"
        "Gene set B,0.9\n"
        "Gene set A,0.1\n"
        "Gene set B,0.4\n"
    ))
    collection = load_pvalue_csv(path)
    assert collection.labels == ['Gene set B', 'Gene set A']
    np.testing.assert_allclose(collection.get('Gene set B').pvalues, [0.9, 0.4])
    assert collection.get('gene_set_a').n_tests == 1


def test_semicolons_and_decimal_commas(tmp_path):
    path = _write(tmp_path, "eu.csv", "label;p\nA;0,25\nA;0,75\n")
    np.testing.assert_allclose(load_pvalue_csv(path).get('A').pvalues, [0.25, 0.75])


def test_bare_decimal_comma_column(tmp_path):
    path = _write(tmp_path, "eu.txt", "0,5\n0,125\n")
    np.testing.assert_allclose(load_pvalue_csv(path).get('eu').pvalues, [0.5, 0.125])


def test_tab_delimited_with_bom_comments_and_blanks(tmp_path):
    path = tmp_path / "tabs.tsv"
    path.write_bytes(
        "\ufefflabel\tp\n# exported by hand\n\nX\t0.3\nX\t0.6\n".encode('utf-8')
    )
    np.testing.assert_allclose(load_pvalue_csv(str(path)).get('X').pvalues, [0.3, 0.6])


def test_non_numeric_cells_are_skipped_with_warning(tmp_path):
    path = _write(tmp_path, "messy.csv", "p\n0.1\nNA\n0.2\n")
    with pytest.warns(UserWarning, match="Non-numeric"):
        collection = load_pvalue_csv(path)
    assert collection.get('messy').n_tests == 2


def test_out_of_range_values_raise(tmp_path):
    path = _write(tmp_path, "bad.csv", "p\n0.1\n1.5\n")
    with pytest.raises(ValueError, match="outside"):
        load_pvalue_csv(path)


def test_header_only_raises(tmp_path):
    path = _write(tmp_path, "empty.csv", "p_value\n")
    with pytest.raises(ValueError, match="No valid p-values"):
        load_pvalue_csv(path)


def test_blank_file_raises(tmp_path):
    path = _write(tmp_path, "blank.csv", "\n# nothing\n")
    with pytest.raises(ValueError, match="no data"):
        load_pvalue_csv(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pvalue_csv(str(tmp_path / "absent.csv"))


def test_decimal_comma_scientific_notation_stays_one_value(tmp_path):
    path = _write(tmp_path, "eu.csv", "1,5e-03\n0,25\n")
    collection = load_pvalue_csv(path)
    assert collection.labels == ['eu']
    np.testing.assert_allclose(collection.get('eu').pvalues, [0.0015, 0.25])


def test_long_form_numeric_label_is_not_merged(tmp_path):
    path = _write(tmp_path, "ids.csv", "label,p_value\n7,0.5\n7,0.25\n")
    collection = load_pvalue_csv(path)
    assert collection.labels == ['7']
    np.testing.assert_allclose(collection.get('7').pvalues, [0.5, 0.25])


def test_quoted_semicolon_does_not_pick_the_delimiter(tmp_path):
    path = _write(tmp_path, "q.csv", '"label","p_value"\n"Batch; run 2",0.1\n')
    collection = load_pvalue_csv(path)
    assert collection.labels == ['Batch; run 2']
    np.testing.assert_allclose(collection.get('Batch; run 2').pvalues, [0.1])


def test_colliding_keys_get_numeric_suffix(tmp_path):
    path = _write(tmp_path, "genes.csv", (
        "label,p_value\n"
        "Gene A,0.1\n"
        "gene_a,0.2\n"
        "GENE A,0.3\n"
    ))
    collection = load_pvalue_csv(path)
    assert [s.key for s in collection] == ['gene_a', 'gene_a_2', 'gene_a_3']
    assert collection.get('gene_a_2').label == 'gene_a'
    np.testing.assert_allclose(collection.get('GENE A').pvalues, [0.3])


def test_extra_columns_are_skipped_with_warning(tmp_path):
    path = _write(tmp_path, "wide.csv", "label,run,p\nA,1,0.1\nA,0.2\n")
    with pytest.warns(UserWarning, match="3 columns"):
        collection = load_pvalue_csv(path)
    np.testing.assert_allclose(collection.get('A').pvalues, [0.2])
