"""Tests for the rule analyzers and the comprehensive audit."""

from __future__ import annotations

import math

import pytest

from accessiquest.analyzer import (
    IssueLevel,
    analyze_alt_text,
    analyze_aria,
    analyze_form_accessibility,
    analyze_heading_structure,
    run_audit,
)


def rule_ids(result):
    return [issue.rule_id for issue in result.issues]


class TestAltText:
    def test_no_images(self):
        result = analyze_alt_text("<p>No pictures here</p>")
        assert result.passed is True
        assert result.score == 100
        assert result.issues == []
        assert result.details == {"image_count": 0}

    def test_missing_alt_is_an_error(self):
        result = analyze_alt_text('<img src="a.png">')
        assert rule_ids(result) == ["img-alt"]
        assert result.issues[0].level is IssueLevel.ERROR
        assert result.issues[0].element == '<img src="a.png">'
        assert result.score == 70
        assert result.passed is False

    def test_empty_alt_is_a_warning(self):
        result = analyze_alt_text('<img src="divider.png" alt="">')
        assert rule_ids(result) == ["img-alt-empty"]
        assert result.score == 95
        assert result.passed is True

    def test_short_alt(self):
        result = analyze_alt_text('<img src="a.png" alt="ab">')
        assert rule_ids(result) == ["img-alt-short"]
        assert result.score == 90

    def test_redundant_words(self):
        result = analyze_alt_text('<img src="dog.png" alt="Picture of a dog">')
        assert rule_ids(result) == ["img-alt-redundant"]
        assert result.score == 90

    def test_one_issue_per_image(self):
        result = analyze_alt_text('<img alt=""><img alt="An image">')
        assert rule_ids(result) == ["img-alt-empty", "img-alt-redundant"]
        assert result.score == 85

    def test_good_alt_single_quotes(self):
        result = analyze_alt_text("<img src='dog.png' alt='A golden retriever'>")
        assert result.issues == []
        assert result.details == {"image_count": 1}

    def test_score_floors_at_zero(self):
        result = analyze_alt_text('<img src="a"><img src="b"><img src="c"><img src="d">')
        assert len(result.issues) == 4
        assert result.score == 0


class TestHeadingStructure:
    def test_no_headings_passes_with_reduced_score(self):
        result = analyze_heading_structure("<p>Plain text</p>")
        assert result.passed is True
        assert result.score == 80
        assert rule_ids(result) == ["heading-missing"]
        assert result.issues[0].level is IssueLevel.WARNING

    def test_one_skip_reported_once(self):
        result = analyze_heading_structure("<h1>A</h1><h3>B</h3>")
        assert rule_ids(result) == ["heading-skip-level"]
        assert result.issues[0].element == "<h3>B</h3>"
        assert result.score == 90
        assert result.passed is True

    def test_going_back_up_is_fine(self):
        result = analyze_heading_structure("<h1>A</h1><h2>B</h2><h3>C</h3><h2>D</h2><h3>E</h3>")
        assert result.issues == []
        assert result.score == 100
        assert result.details == {"heading_count": 5, "h1_count": 1}

    def test_multiple_h1(self):
        result = analyze_heading_structure("<h1>A</h1><h1>B</h1>")
        assert rule_ids(result) == ["heading-h1-multiple"]
        assert result.score == 75
        assert result.passed is False
        assert result.details["h1_count"] == 2

    def test_missing_h1_and_skip(self):
        result = analyze_heading_structure("<h2>A</h2><h4>B</h4>")
        assert rule_ids(result) == ["heading-h1-missing", "heading-skip-level"]
        assert result.score == 75
        assert result.passed is True

    def test_whitespace_only_heading_is_empty(self):
        result = analyze_heading_structure("<h1>Title</h1><h2>   </h2>")
        assert rule_ids(result) == ["heading-empty"]
        assert result.issues[0].level is IssueLevel.ERROR
        assert result.score == 85
        assert result.passed is False


class TestFormAccessibility:
    def test_no_inputs(self):
        result = analyze_form_accessibility("<label>Orphan</label>")
        assert result.passed is True
        assert result.score == 100
        assert result.details == {"input_count": 0, "label_count": 1}

    def test_labelled_input(self):
        result = analyze_form_accessibility('<label for="email">Email</label><input id="email">')
        assert result.issues == []
        assert result.details == {"input_count": 1, "label_count": 1}

    def test_label_with_nested_markup(self):
        result = analyze_form_accessibility('<label for="n"><span>Name</span></label><input id="n">')
        assert result.issues == []

    def test_hidden_inputs_are_skipped(self):
        result = analyze_form_accessibility('<input type="HIDDEN" name="csrf">')
        assert result.issues == []
        assert result.score == 100
        assert result.details["input_count"] == 1

    def test_unlabelled_input(self):
        result = analyze_form_accessibility('<label for="mail">Email</label><input id="email">')
        assert rule_ids(result) == ["input-label-missing"]
        assert result.score == 80
        assert result.passed is False

    def test_placeholder_without_id(self):
        result = analyze_form_accessibility('<input type="text" placeholder="Search">')
        assert rule_ids(result) == ["input-id-missing", "placeholder-label"]
        assert result.score == 75
        assert result.passed is True

    def test_placeholder_with_id_is_not_flagged(self):
        result = analyze_form_accessibility(
            '<label for="q">Search</label><input id="q" placeholder="Search">'
        )
        assert result.issues == []


class TestAria:
    def test_empty_button_without_label(self):
        result = analyze_aria("<button></button>")
        assert rule_ids(result) == ["button-accessible-name"]
        assert result.score == 75
        assert result.passed is False

    @pytest.mark.parametrize(
        "source",
        ["<button>Save</button>", '<button aria-label="Close dialog"> </button>'],
    )
    def test_named_buttons(self, source):
        assert analyze_aria(source).issues == []

    def test_unknown_attribute_is_a_warning(self):
        result = analyze_aria('<div aria-labeledby="title"></div>')
        assert rule_ids(result) == ["aria-invalid-attribute"]
        assert result.issues[0].element == "aria-labeledby"
        assert result.score == 95
        assert result.passed is True
        assert result.details == {"aria_attribute_count": 1}

    def test_each_unknown_occurrence_counts(self):
        result = analyze_aria('<i aria-foo="1"></i><i aria-foo="2"></i>')
        assert len(result.issues) == 2
        assert result.score == 90

    def test_known_attributes_any_case(self):
        result = analyze_aria('<div ARIA-LIVE="polite" aria-hidden="true"></div>')
        assert result.issues == []
        assert result.details == {"aria_attribute_count": 2}


class TestRunAudit:
    def test_accessible_page(self, accessible_page):
        result = run_audit(accessible_page)
        assert result.passed is True
        assert result.score == 100
        assert result.issues == []
        assert result.details == {
            "alt_text": {"image_count": 1},
            "headings": {"heading_count": 2, "h1_count": 1},
            "forms": {"input_count": 2, "label_count": 1},
            "aria": {"aria_attribute_count": 2},
        }

    def test_broken_page(self, broken_page):
        result = run_audit(broken_page)
        assert result.passed is False
        assert result.score == 60
        assert rule_ids(result) == [
            "img-alt",
            "img-alt-empty",
            "heading-h1-multiple",
            "heading-skip-level",
            "heading-empty",
            "input-id-missing",
            "placeholder-label",
            "input-label-missing",
            "button-accessible-name",
            "aria-invalid-attribute",
        ]
        assert result.errors_count == 5
        assert result.warnings_count == 5

    def test_empty_source(self):
        result = run_audit("")
        assert result.passed is True
        assert result.score == 95
        assert rule_ids(result) == ["heading-missing"]

    def test_mean_rounds_half_up(self):
        # 70 + 80 + 100 + 100 = 350, mean 87.5
        assert run_audit('<img src="a.png">').score == 88

    def test_issues_keep_analyzer_order(self):
        source = '<div aria-foo="1"></div><button></button><input id="q"><h2>T</h2><img src="a.png">'
        result = run_audit(source)
        assert rule_ids(result) == [
            "img-alt",
            "heading-h1-missing",
            "input-label-missing",
            "button-accessible-name",
            "aria-invalid-attribute",
        ]
        # 70, 85, 80, 70
        assert result.score == 76

    @pytest.mark.parametrize(
        "source",
        [
            '<img src="a.png"><h1>A</h1><h3>B</h3>',
            '<input placeholder="x"><button></button>',
            '<h1>T</h1><img alt="">',
            "",
        ],
    )
    def test_score_is_rounded_mean_of_analyzers(self, source):
        scores = [
            analyze_alt_text(source).score,
            analyze_heading_structure(source).score,
            analyze_form_accessibility(source).score,
            analyze_aria(source).score,
        ]
        result = run_audit(source)
        assert result.score == math.floor(sum(scores) / 4 + 0.5)
        assert result.passed == (result.errors_count == 0)

    def test_idempotent(self, broken_page):
        assert run_audit(broken_page).to_dict() == run_audit(broken_page).to_dict()

    @pytest.mark.parametrize(
        "source",
        ['<img alt="unterminated <h1 <input id=\'x', "<<<>>>", "<h1></h2>", None, 12],
    )
    def test_malformed_input_never_raises(self, source):
        result = run_audit(source)
        assert 0 <= result.score <= 100

    def test_to_dict_shape(self):
        data = run_audit('<img src="a.png">').to_dict()
        assert set(data) == {"passed", "score", "issues", "details"}
        assert data["issues"][0] == {
            "severity": "error",
            "rule": "img-alt",
            "message": "Image 1 is missing alt attribute",
            "element": '<img src="a.png">',
            "suggestion": 'Add alt="descriptive text" to describe the image content',
        }
