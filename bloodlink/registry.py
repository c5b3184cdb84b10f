"""
Operations that change the registry: donor sign-up, deletion and target edits.

Each one runs its whole read-modify-write cycle while holding the repository
lock so concurrent requests can't drop each other's updates.
"""
from datetime import datetime, timedelta, timezone

from .storage import BLOOD_GROUPS
from .validators import coerce_target, parse_int

DONOR_FIELDS = ('name', 'age', 'blood_group', 'contact', 'city')

INVALID_FORM_MESSAGE = 'Please fill all fields correctly.'
REGISTERED_MESSAGE = 'Registration successful — thank you! You can view availability.'
TARGETS_SAVED_MESSAGE = 'Targets saved.'
DELETE_PROMPT = 'Delete this donor?'

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def age_prompt(min_age, max_age):
    return f'Age is outside typical donation range ({min_age}–{max_age}). Still register?'


# ============== DONOR REGISTRATION ==============

class Submission:
    """Outcome of a registration attempt"""

    IDLE = 'idle'
    REJECTED = 'rejected'
    NEEDS_CONFIRMATION = 'needs_confirmation'
    COMMITTED = 'committed'

    def __init__(self, state, message=None, donor=None):
        self.state = state
        self.message = message
        self.donor = donor

    def __repr__(self):
        return f'<Submission {self.state}>'


def clean_donor_form(form):
    """
    Trim the raw field values and validate them.

    Returns ``(fields, error)``; ``fields`` has ``age`` as an int when the form
    is valid, otherwise ``error`` holds the message to show.
    """
    fields = {name: (form.get(name) or '').strip() for name in DONOR_FIELDS}
    age = parse_int(fields['age'])
    required = (fields['name'], fields['blood_group'], fields['contact'], fields['city'])
    if not all(required) or age is None or fields['blood_group'] not in BLOOD_GROUPS:
        return fields, INVALID_FORM_MESSAGE
    fields['age'] = age
    return fields, None


def timestamp_ms(now):
    """Milliseconds since the epoch for an aware datetime"""
    return (now - EPOCH) // timedelta(milliseconds=1)


def isoformat_utc(now):
    """ISO-8601 in UTC with millisecond precision and a trailing Z"""
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def make_donor(fields, now=None):
    now = now or datetime.now(timezone.utc)
    return {
        'id': timestamp_ms(now),
        'name': fields['name'],
        'age': fields['age'],
        'blood_group': fields['blood_group'],
        'contact': fields['contact'],
        'city': fields['city'],
        'date_registered': isoformat_utc(now)
    }


def submit_registration(repo, form, confirmed=None, min_age=16, max_age=75, now=None):
    """
    Validate a sign-up and append the donor when it passes.

    ``confirmed`` answers the out-of-range age question: None when it hasn't
    been asked yet, False when the user declined, True to go ahead.
    """
    fields, error = clean_donor_form(form)
    if error:
        return Submission(Submission.REJECTED, error)

    if not min_age <= fields['age'] <= max_age:
        if confirmed is None:
            return Submission(Submission.NEEDS_CONFIRMATION, age_prompt(min_age, max_age))
        if not confirmed:
            return Submission(Submission.IDLE)

    donor = make_donor(fields, now)
    with repo.lock:
        donors = repo.load_donors()
        donors.append(donor)
        repo.save_donors(donors)
    return Submission(Submission.COMMITTED, REGISTERED_MESSAGE, donor)


# ============== DELETION ==============

def delete_donor(repo, donor_id):
    """Remove the donor with ``donor_id``; returns False when there was none"""
    with repo.lock:
        donors = repo.load_donors()
        remaining = [d for d in donors if d.get('id') != donor_id]
        if len(remaining) == len(donors):
            return False
        repo.save_donors(remaining)
    return True


# ============== TARGETS ==============

def read_target_form(form):
    return {group: coerce_target(form.get(f'target_{group}')) for group in BLOOD_GROUPS}


def update_targets(repo, form):
    """Replace the whole target table with the editor's values"""
    targets = read_target_form(form)
    with repo.lock:
        repo.save_targets(targets)
    return targets
