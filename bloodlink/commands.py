from datetime import datetime, timedelta, timezone

import click
from flask import current_app
from flask.cli import with_appcontext

from .registry import EPOCH, make_donor, timestamp_ms
from .storage import BLOOD_GROUPS

SAMPLE_PEOPLE = [
    ('Rajesh Kumar', 28, '9876543210', 'Hyderabad'),
    ('Priya Sharma', 34, '9876543211', 'Bangalore'),
    ('Amit Patel', 41, '9876543212', 'Mumbai'),
    ('Sneha Reddy', 25, '9876543213', 'Chennai'),
    ('Vikram Singh', 52, '9876543214', 'Delhi'),
    ('Anjali Nair', 30, '9876543215', 'Kochi'),
    ('Suresh Iyer', 46, '9876543216', 'Pune'),
    ('Meera Das', 22, '9876543217', 'Kolkata'),
]


@click.command('seed')
@click.option('--per-group', default=2, show_default=True, type=click.IntRange(min=0),
              help='Sample donors to add for each blood group.')
@click.option('--reset', is_flag=True, help='Delete all donors before seeding.')
@with_appcontext
def seed_command(per_group, reset):
    """Fill the registry with sample donors."""
    repo = current_app.extensions['bloodlink']
    with repo.lock:
        if reset:
            click.echo('Deleting ALL donors...')
            donors = []
        else:
            donors = repo.load_donors()

        # Ids are creation times in ms; keep them clear of existing donors
        start = datetime.now(timezone.utc)
        last_id = max((d.get('id') for d in donors if isinstance(d.get('id'), int)), default=0)
        if last_id >= timestamp_ms(start):
            start = EPOCH + timedelta(milliseconds=last_id + 1)

        created = 0
        for group in BLOOD_GROUPS:
            for i in range(per_group):
                name, age, contact, city = SAMPLE_PEOPLE[(created + i) % len(SAMPLE_PEOPLE)]
                fields = {'name': name, 'age': age, 'blood_group': group,
                          'contact': contact, 'city': city}
                donors.append(make_donor(fields, now=start + timedelta(milliseconds=created + i)))
            created += per_group
            click.echo(f'{group}: added {per_group} donor(s).')

        repo.save_donors(donors)
    click.echo(f'Done. Created {created} donor(s) total.')
