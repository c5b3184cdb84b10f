from flask import (Blueprint, current_app, flash, jsonify, redirect, render_template,
                   request, url_for)
from werkzeug.exceptions import BadRequest, NotFound

from . import views
from .registry import (DELETE_PROMPT, TARGETS_SAVED_MESSAGE, Submission, delete_donor,
                       submit_registration, update_targets)
from .storage import BLOOD_GROUPS, is_donor_record
from .validators import coerce_target

registry_bp = Blueprint('registry', __name__)
api_bp = Blueprint('api', __name__)


def get_repository():
    return current_app.extensions['bloodlink']


def find_donor(donors, donor_id):
    return next((d for d in donors if d.get('id') == donor_id), None)


# ============== PAGES ==============

@registry_bp.route('/')
def home():
    """Home page"""
    repo = get_repository()
    stats = views.home_stats(repo.load_donors(), repo.load_targets())
    return render_template('index.html', stats=stats)


@registry_bp.route('/register', methods=['GET', 'POST'])
def register():
    """Donor registration"""
    if request.method == 'POST':
        answer = request.form.get('confirm_age')
        confirmed = None if answer is None else answer == 'yes'
        result = submit_registration(
            get_repository(), request.form, confirmed,
            min_age=current_app.config['MIN_DONOR_AGE'],
            max_age=current_app.config['MAX_DONOR_AGE'],
        )

        if result.state == Submission.NEEDS_CONFIRMATION:
            return render_template('confirm_age.html', prompt=result.message, form=request.form)

        if result.state == Submission.COMMITTED:
            donor = result.donor
            current_app.logger.info("New donor registered: %s (%s)", donor['id'], donor['blood_group'])
            flash(result.message, 'success')
            return redirect(url_for('registry.register'))

        if result.state == Submission.REJECTED:
            flash(result.message, 'error')
        # Rejected or declined: show the form again with what was typed
        return render_template('register.html', form=request.form, blood_groups=BLOOD_GROUPS)

    return render_template('register.html', form={}, blood_groups=BLOOD_GROUPS)


@registry_bp.route('/availability')
def availability():
    """Availability cards, target editor and donor table"""
    repo = get_repository()
    donors = repo.load_donors()
    targets = repo.load_targets()
    return render_template(
        'availability.html',
        cards=views.availability_cards(donors, targets),
        target_inputs=views.target_inputs(targets),
        rows=views.donor_table(donors),
    )


@registry_bp.route('/targets', methods=['POST'])
def save_targets():
    """Save the target editor"""
    targets = update_targets(get_repository(), request.form)
    current_app.logger.info("Targets saved: %s", targets)
    flash(TARGETS_SAVED_MESSAGE, 'success')
    return redirect(url_for('registry.availability'))


@registry_bp.route('/donors/<int:donor_id>/delete', methods=['GET', 'POST'])
def delete(donor_id):
    """Ask for confirmation, then delete a donor"""
    repo = get_repository()
    if request.method == 'POST':
        if request.form.get('confirm') == 'yes' and delete_donor(repo, donor_id):
            current_app.logger.info("Donor deleted: %s", donor_id)
            flash('Donor deleted.', 'success')
        return redirect(url_for('registry.availability'))

    donor = find_donor(repo.load_donors(), donor_id)
    return render_template('confirm_delete.html', prompt=DELETE_PROMPT, donor=donor, donor_id=donor_id)


# ============== API ==============

@api_bp.route('/statistics')
def statistics():
    """Home stats and availability cards as JSON"""
    repo = get_repository()
    donors = repo.load_donors()
    targets = repo.load_targets()
    return jsonify({
        'home': views.home_stats(donors, targets),
        'availability': views.availability_cards(donors, targets)
    })


@api_bp.route('/debug/donors', methods=['GET', 'PUT'])
def debug_donors():
    repo = get_repository()
    if request.method == 'PUT':
        donors = request.get_json(silent=True)
        if not isinstance(donors, list) or not all(is_donor_record(d) for d in donors):
            raise BadRequest('Expected a JSON array of donor objects with a string blood_group')
        with repo.lock:
            repo.save_donors(donors)
    return jsonify(repo.load_donors())


@api_bp.route('/debug/targets', methods=['GET', 'PUT'])
def debug_targets():
    repo = get_repository()
    if request.method == 'PUT':
        targets = request.get_json(silent=True)
        if not isinstance(targets, dict):
            raise BadRequest('Expected a JSON object of targets')
        with repo.lock:
            repo.save_targets({group: coerce_target(value) for group, value in targets.items()})
    return jsonify(repo.load_targets())


@api_bp.before_request
def guard_debug_api():
    if request.endpoint in ('api.debug_donors', 'api.debug_targets') \
            and not current_app.config['EXPOSE_DEBUG_API']:
        raise NotFound()


@api_bp.errorhandler(BadRequest)
def bad_request(e):
    return jsonify({'error': e.description}), 400


@api_bp.errorhandler(NotFound)
def not_found(e):
    return jsonify({'error': 'Not found'}), 404
