"""Tests for results_processor.parsers.table_detector module."""

from results_processor.parsers.table_detector import (
    detect_table_blocks,
    extract_results,
    extract_sheet_results,
    find_column_index,
    find_group_title,
    is_likely_header,
    map_header_columns,
)
from results_processor.utils.constants import HEADER_SYNONYMS


HEADER = ['Pos', 'Name', 'Club', 'Total']


class TestFindColumnIndex:
    """Tests for find_column_index function."""

    def test_exact_match_beats_substring(self):
        """An exact header wins even when an earlier header contains a synonym."""
        row = ['Final Total', 'Score']
        assert find_column_index(row, HEADER_SYNONYMS['total']) == 1
        assert find_column_index(['Judge Scores', 'Total'], HEADER_SYNONYMS['total']) == 1

    def test_substring_match(self):
        assert find_column_index(['Gymnast Name', 'Club Name'], HEADER_SYNONYMS['club']) == 1

    def test_case_and_whitespace_insensitive(self):
        assert find_column_index(['  POS ', 'NAME'], HEADER_SYNONYMS['position']) == 0

    def test_no_match(self):
        assert find_column_index(['Pos', 'Name'], HEADER_SYNONYMS['club']) == -1
        assert find_column_index([], HEADER_SYNONYMS['club']) == -1

    def test_map_header_columns(self):
        columns = map_header_columns(['Pos', 'Name', 'Club', 'Age Group', 'Total'])
        assert columns['position'] == 0
        assert columns['name'] == 1
        assert columns['club'] == 2
        assert columns['age'] == 3
        assert columns['total'] == 4
        assert columns['gender'] == -1


class TestIsLikelyHeader:
    """Tests for is_likely_header function."""

    def test_name_and_total(self):
        assert is_likely_header(['Name', 'Total'])

    def test_name_and_club(self):
        assert is_likely_header(['Competitor', 'Team'])

    def test_forename_and_surname(self):
        assert is_likely_header(['First', 'Last', 'Score'])

    def test_name_only(self):
        assert not is_likely_header(['Pos', 'Name'])

    def test_total_without_name(self):
        assert not is_likely_header(['Pos', 'Club', 'Total'])

    def test_empty(self):
        assert not is_likely_header([])
        assert not is_likely_header(None)


class TestFindGroupTitle:
    """Tests for find_group_title function."""

    def test_first_cell_preferred(self, make_grid):
        grid = make_grid([
            ['DMT Men - 14-15yrs', 'Panel A - Judges'],
            HEADER,
        ])
        assert find_group_title(grid, 2) == 'DMT Men - 14-15yrs'

    def test_joined_row_text(self, make_grid):
        grid = make_grid([
            [None, 'TRA', 'Women - 11-12yrs'],
            HEADER,
        ])
        assert find_group_title(grid, 2) == 'TRA Women - 11-12yrs'

    def test_nearest_row_wins(self, make_grid):
        grid = make_grid([
            ['Regional Final - Round 1'],
            ['TRA Girls - 9-10yrs'],
            HEADER,
        ])
        assert find_group_title(grid, 3) == 'TRA Girls - 9-10yrs'

    def test_scan_depth(self, make_grid):
        """Titles more than five rows above the header are ignored."""
        grid = make_grid([
            ['DMT Men - Open'],
            [None], [None], [None], [None], [None],
            HEADER,
        ])
        assert find_group_title(grid, 7) == ''

        grid = make_grid([
            ['DMT Men - Open'],
            [None], [None], [None], [None],
            HEADER,
        ])
        assert find_group_title(grid, 6) == 'DMT Men - Open'

    def test_no_separator(self, make_grid):
        grid = make_grid([
            ['Results'],
            HEADER,
        ])
        assert find_group_title(grid, 2) == ''


class TestDetectTableBlocks:
    """Tests for detect_table_blocks function."""

    def test_multiple_blocks(self, make_grid):
        grid = make_grid([
            ['DMT Men - 14-15yrs'],
            HEADER,
            [1, 'Sam Jones', 'Springers', 56.2],
            [2, 'Alex Smith', 'Bouncers', 55.1],
            [None],
            ['DMT Women - 14-15yrs'],
            HEADER,
            [1, 'Jo Brown', 'Springers', 50],
        ])
        blocks = detect_table_blocks(grid)

        assert len(blocks) == 2
        assert blocks[0].header_row == 2
        assert blocks[0].title == 'DMT Men - 14-15yrs'
        assert blocks[0].start_row == 3
        assert blocks[1].header_row == 7
        assert blocks[1].title == 'DMT Women - 14-15yrs'
        assert blocks[1].end_row == 8

    def test_header_ends_block_without_gap(self, make_grid):
        grid = make_grid([
            HEADER,
            [1, 'Sam Jones', 'Springers', 56.2],
            HEADER,
            [1, 'Jo Brown', 'Springers', 50],
        ])
        blocks = detect_table_blocks(grid)
        assert [b.header_row for b in blocks] == [1, 3]
        assert blocks[0].end_row == 2

    def test_no_header(self, make_grid):
        grid = make_grid([['Teams'], [1, 'Springers', 120.5]])
        assert detect_table_blocks(grid) == []


class TestExtractSheetResults:
    """Tests for extract_sheet_results function."""

    def test_titled_blocks(self, make_grid):
        grid = make_grid([
            ['DMT Men - 14-15yrs'],
            HEADER,
            [1, 'Sam Jones', 'Springers', 56.2],
            [2, 'Alex Smith', 'Bouncers', 55.1],
            [None],
            ['TRA Women - 11-12yrs'],
            HEADER,
            [1, 'Jo Brown', 'Springers', 50],
        ])
        records = extract_sheet_results(grid)

        assert [r.name for r in records] == ['Sam Jones', 'Alex Smith', 'Jo Brown']
        sam = records[0]
        assert sam.position == '1'
        assert sam.club == 'Springers'
        assert sam.total_score == '56.200'
        assert sam.discipline == 'DMT'
        assert sam.discipline_code == 'DMT'
        assert sam.category_part == 'Men'
        assert sam.age_group == '14-15yrs'
        assert sam.source_sheet == 'DMT'
        assert sam.source_row == 3
        assert not sam.is_green

        jo = records[2]
        assert jo.discipline == 'Trampoline'
        assert jo.discipline_code == 'TRA'
        assert jo.category_part == 'Women'
        assert jo.age_group == '11-12yrs'
        assert jo.total_score == '50.000'
        assert jo.source_row == 8

    def test_one_record_per_named_row(self, make_grid):
        """Rows without a name are dropped; blank spacer rows are skipped."""
        grid = make_grid([
            HEADER,
            [1, 'Sam Jones', 'Springers', 56.2],
            [None],
            [2, None, 'Springers', 40],
            [3, 'Alex Smith', 'Bouncers', 'DNS'],
        ])
        records = extract_sheet_results(grid)

        assert [r.name for r in records] == ['Sam Jones', 'Alex Smith']
        assert records[1].source_row == 5
        assert records[1].total_score == 'DNS'

    def test_forename_and_surname(self, make_grid):
        grid = make_grid([
            ['Pos', 'First', 'Last', 'Club', 'Total'],
            [1, 'Sam', 'Jones', 'Springers', 56.2],
            [2, 'Alex', None, 'Bouncers', 51],
        ])
        records = extract_sheet_results(grid)
        assert [r.name for r in records] == ['Sam Jones', 'Alex']

    def test_forename_header_is_the_name_column(self, make_grid):
        """Test "Forename" matches 'name' by substring, so the surname is not joined."""
        grid = make_grid([
            ['Pos', 'Forename', 'Surname', 'Club', 'Total'],
            [1, 'Sam', 'Jones', 'Springers', 56.2],
        ])
        records = extract_sheet_results(grid)
        assert [r.name for r in records] == ['Sam']

    def test_age_and_gender_columns(self, make_grid):
        grid = make_grid([
            ['Pos', 'Name', 'Club', 'Age Group', 'Gender', 'Total'],
            [1, 'Sam Jones', 'Springers', '14-15yrs', 'Men', 56.2],
            [2, 'Jo Brown', 'Springers', 'Women 17+', 'Women', 49],
        ])
        records = extract_sheet_results(grid)

        assert records[0].age_group == 'Men 14-15yrs'
        assert records[0].category_part == ''
        assert records[1].age_group == 'Women 17+'

    def test_untitled_block_falls_back_to_sheet(self, make_grid):
        grid = make_grid([
            HEADER,
            [1, 'Sam Jones', 'Springers', 41],
            [2, 'Jo Brown', 'Disability Squad', 38],
        ], name='TRA')
        records = extract_sheet_results(grid)

        assert records[0].discipline_code == 'TRA'
        assert records[0].discipline == 'Trampoline'
        assert records[0].age_group == 'Unknown'
        assert records[1].discipline_code == 'TPD'
        assert records[1].discipline == 'Trampoline'

    def test_fixed_columns_override(self, make_grid, sparse):
        """DMT sheets read the final rank and score from AZ and AY."""
        grid = make_grid([
            HEADER,
            sparse({'A': 1, 'B': 'Sam Jones', 'C': 'Springers', 'D': 50, 'AY': 52.5, 'AZ': 3}),
            sparse({'A': 2, 'B': 'Jo Brown', 'C': 'Springers', 'D': 48}),
        ])
        records = extract_sheet_results(grid)

        assert records[0].position == '3'
        assert records[0].total_score == '52.500'
        assert records[1].position == '2'
        assert records[1].total_score == '48.000'

    def test_column_a_override(self, make_grid):
        grid = make_grid([
            ['DMT Men - 14-15yrs'],
            ['Event', 'Name', 'Club', 'Total'],
            ['TRA Women - 13-14yrs', 'Jo Brown', 'Springers', 50],
        ])
        records = extract_sheet_results(grid)

        assert records[0].discipline_code == 'TRA'
        assert records[0].discipline == 'Trampoline'
        assert records[0].category_part == 'Women'
        assert records[0].age_group == '13-14yrs'


class TestExtractResults:
    """Tests for extract_results function."""

    def test_only_included_sheets(self, make_workbook):
        workbook = make_workbook({
            'DMT': [HEADER, [1, 'Sam Jones', 'Springers', 56.2]],
            'DMT DD': [HEADER, [1, 'Alex Smith', 'Bouncers', 50]],
            'TRA': [HEADER, [1, 'Jo Brown', 'Springers', 40]],
            'Teams': [HEADER, [1, 'Team A', 'Springers', 120]],
        })
        records = extract_results(workbook)

        assert [(r.source_sheet, r.name) for r in records] == [
            ('DMT', 'Sam Jones'),
            ('TRA', 'Jo Brown'),
        ]

    def test_logs_per_sheet_counts(self, make_workbook, capsys):
        workbook = make_workbook({'DMT': [HEADER, [1, 'Sam Jones', 'Springers', 56.2]]})
        extract_results(workbook)
        assert "DMT: 1 results" in capsys.readouterr().out
