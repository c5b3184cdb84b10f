"""
View models for the registry pages.

Each function takes the donor list and/or target table and returns plain
dicts/lists that the templates (or the JSON API) render as they are. Nothing
here touches storage or the request, so the same data always renders the same.
"""
from datetime import datetime

from .stats import count_by_group, most_needed, percent_of_target
from .storage import BLOOD_GROUPS, DEFAULT_TARGETS, DISPLAY_ORDER


def home_stats(donors, targets):
    """Totals and most-needed group for the home page"""
    total = len(donors)
    group = most_needed(count_by_group(donors), targets)
    label = group + (' (no donors yet)' if total == 0 else '')
    return {
        'total': total,
        'most_needed': group,
        'most_needed_label': label
    }


def availability_card(group, count, target):
    percent = percent_of_target(count, target)
    percent_text = 'N/A' if percent is None else f'{percent}%'
    bar_width = percent or 0
    return {
        'group': group,
        'count': count,
        'target': target,
        'percent': percent,
        'percent_text': percent_text,
        'bar_width': bar_width,
        'bar_text': '✓ Full' if percent == 100 else percent_text,
        'label': f'{group} — {percent_text} of target',
        'summary': f'{count} donors • target {target}'
    }


def availability_cards(donors, targets):
    """One progress card per blood group, in display order"""
    counts = count_by_group(donors)
    return [
        availability_card(group, counts.get(group, 0), targets.get(group, DEFAULT_TARGETS[group]))
        for group in DISPLAY_ORDER
    ]


def format_registered(timestamp):
    """Render an ISO-8601 registration time as local 'YYYY-MM-DD HH:MM:SS'"""
    if not timestamp:
        return ''
    try:
        # fromisoformat() only learned the trailing Z in Python 3.11
        parsed = datetime.fromisoformat(str(timestamp).replace('Z', '+00:00'))
    except ValueError:
        return str(timestamp)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime('%Y-%m-%d %H:%M:%S')


def donor_table(donors):
    """Donor rows, most recently registered first"""
    rows = []
    for donor in reversed(donors):
        rows.append({
            'id': donor.get('id'),
            'name': donor.get('name', ''),
            'blood_group': donor.get('blood_group', ''),
            'age': donor.get('age', ''),
            'contact': donor.get('contact', ''),
            'city': donor.get('city', ''),
            'registered': format_registered(donor.get('date_registered'))
        })
    return rows


def target_inputs(targets):
    """Seed values for the target editor, one per blood group"""
    return [{'group': group, 'value': targets.get(group, DEFAULT_TARGETS[group])} for group in BLOOD_GROUPS]
