from bloodlink import views
from bloodlink.storage import BLOOD_GROUPS, DEFAULT_TARGETS, DISPLAY_ORDER


def test_home_stats_empty_registry():
    stats = views.home_stats([], DEFAULT_TARGETS)
    assert stats == {
        'total': 0,
        'most_needed': 'A+',
        'most_needed_label': 'A+ (no donors yet)'
    }


def test_home_stats_with_donors(make_record):
    donors = [make_record(i, g) for i, g in enumerate(BLOOD_GROUPS) if g != 'O+']
    stats = views.home_stats(donors, DEFAULT_TARGETS)
    assert stats['total'] == 7
    assert stats['most_needed'] == 'O+'
    assert stats['most_needed_label'] == 'O+'


def test_cards_follow_display_order():
    cards = views.availability_cards([], DEFAULT_TARGETS)
    assert [c['group'] for c in cards] == DISPLAY_ORDER


def test_card_half_way(make_record):
    donors = [make_record(i, 'O+') for i in range(5)]
    targets = dict(DEFAULT_TARGETS, **{'O+': 10})
    card = views.availability_cards(donors, targets)[0]
    assert card['group'] == 'O+'
    assert card['percent'] == 50
    assert card['bar_width'] == 50
    assert card['bar_text'] == '50%'
    assert card['label'] == 'O+ — 50% of target'
    assert card['summary'] == '5 donors • target 10'


def test_card_full():
    card = views.availability_card('A-', 12, 8)
    assert card['percent'] == 100
    assert card['bar_width'] == 100
    assert card['percent_text'] == '100%'
    assert card['bar_text'] == '✓ Full'


def test_card_zero_target():
    card = views.availability_card('AB-', 0, 0)
    assert card['percent'] is None
    assert card['percent_text'] == 'N/A'
    assert card['bar_text'] == 'N/A'
    assert card['bar_width'] == 0
    assert card['label'] == 'AB- — N/A of target'


def test_card_missing_target_uses_default():
    cards = views.availability_cards([], {})
    assert {c['group']: c['target'] for c in cards} == DEFAULT_TARGETS


def test_availability_is_idempotent(make_record):
    donors = [make_record(1, 'O+'), make_record(2, 'B-')]
    assert views.availability_cards(donors, DEFAULT_TARGETS) == views.availability_cards(donors, DEFAULT_TARGETS)
    assert views.donor_table(donors) == views.donor_table(donors)


def test_donor_table_most_recent_first(make_record):
    donors = [make_record(1, 'O+', name='First'), make_record(2, 'A+', name='Second')]
    rows = views.donor_table(donors)
    assert [r['name'] for r in rows] == ['Second', 'First']
    assert rows[0]['id'] == 2
    # The stored list is left alone
    assert donors[0]['name'] == 'First'


def test_donor_table_empty():
    assert views.donor_table([]) == []


def test_format_registered():
    assert views.format_registered(None) == ''
    assert views.format_registered('not a date') == 'not a date'
    assert views.format_registered('2024-01-01T10:00:00') == '2024-01-01 10:00:00'
    formatted = views.format_registered('2024-01-01T10:00:00.000Z')
    assert len(formatted) == len('2024-01-01 10:00:00')


def test_target_inputs():
    inputs = views.target_inputs(dict(DEFAULT_TARGETS, **{'B-': 0}))
    assert [i['group'] for i in inputs] == BLOOD_GROUPS
    assert {i['group']: i['value'] for i in inputs}['B-'] == 0
