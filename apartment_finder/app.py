from flask import Flask, render_template, request, jsonify
import datetime
import logging
import random

from apartment_finder import config
from apartment_finder.core import manager
from apartment_finder.core.generator import build_dataset
from apartment_finder.core.models import SEARCH_LOCATIONS, WEEKDAY_NAMES
from apartment_finder.core.search_form import parse_search_form

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO),
                    format=config.LOG_FORMAT)

logger = logging.getLogger(__name__)

MONTH_NAMES = {1: 'Jan', 2: 'Feb', 3: 'Mar', 4: 'Apr', 5: 'May', 6: 'Jun', 7: 'Jul', 8: 'Aug',
               9: 'Sep', 10: 'Oct', 11: 'Nov', 12: 'Dec'}

LOCATION_LABELS = {'all': 'All Locations', 'kadri': 'Kadri', 'bejai': 'Bejai'}


def format_month_day(day):
    return f"{MONTH_NAMES[day.month]} {day.day:02d}"


def format_day_badge(day):
    return f"{format_month_day(day)} ({WEEKDAY_NAMES[day.weekday()]})"


def run_search(dataset, params, flexibility_days=config.SEARCH_FLEXIBILITY_DAYS):
    results = manager.get_availability_for_date_range(
        dataset, params.location, params.date, params.guest_count, flexibility_days
    )
    matching = manager.collect_available_flat_ids(results)
    logger.info(
        f"Search {params.location} {params.date.isoformat()} for {params.guest_count} guests "
        f"(±{flexibility_days} days): {len(matching)} flats found.")
    return results


def create_app(dataset=None, rng=None):
    app = Flask(__name__)
    app.secret_key = config.SECRET_KEY

    if dataset is None:
        if rng is None and config.DATASET_SEED is not None:
            rng = random.Random(config.DATASET_SEED)
        dataset = build_dataset(rng)
    app.config['DATASET'] = dataset

    @app.template_filter('month_day')
    def month_day_filter(day):
        return format_month_day(day)

    @app.template_filter('day_badge')
    def day_badge_filter(day):
        return format_day_badge(day)

    @app.context_processor
    def inject_global_vars():
        return {
            'current_year': datetime.datetime.now().year,
            'location_labels': LOCATION_LABELS,
            'search_locations': SEARCH_LOCATIONS,
        }

    @app.route('/')
    def index():
        form_values = {'location': 'all', 'date': '', 'guest_count': 1}
        errors = {}
        search = None

        if request.args:
            form_values.update({k: request.args.get(k, form_values[k]) for k in form_values})
            params, errors = parse_search_form(request.args)
            if errors:
                app.logger.warning(f"Search rejected: {errors}")
            else:
                results = run_search(dataset, params)
                summaries = manager.summarize_availability(
                    results, params.date, params.location, dataset.flats
                )
                search = {
                    'params': params,
                    'results': results,
                    'flats': summaries,
                    'range_start': results[0].date,
                    'range_end': results[-1].date,
                    'notice': f"Search complete! Showing available apartments for {params.guest_count} guests.",
                }

        return render_template(
            'index.html',
            form_values=form_values,
            errors=errors,
            search=search,
            flexibility_days=config.SEARCH_FLEXIBILITY_DAYS,
        )

    @app.route('/api/availability', methods=['POST'])
    def api_availability():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "Request body must be a JSON object."}), 400

        params, errors = parse_search_form(data)

        flexibility_days = data.get('flexibility_days', config.SEARCH_FLEXIBILITY_DAYS)
        if (isinstance(flexibility_days, bool) or not isinstance(flexibility_days, int)
                or not 0 <= flexibility_days <= config.MAX_API_FLEXIBILITY_DAYS):
            errors['flexibility_days'] = \
                f"Flexibility must be a whole number between 0 and {config.MAX_API_FLEXIBILITY_DAYS}."

        if errors:
            app.logger.warning(f"API search rejected: {errors}")
            return jsonify({"success": False, "errors": errors}), 400

        try:
            results = run_search(dataset, params, flexibility_days)
            return jsonify({
                "success": True,
                "location": params.location,
                "date": params.date.isoformat(),
                "guest_count": params.guest_count,
                "flexibility_days": flexibility_days,
                "days": [r.to_dict() for r in results],
                "has_availability": manager.has_availability(results),
            })
        except Exception as e:
            app.logger.error(f"Error in api_availability: {e}", exc_info=True)
            return jsonify({"success": False, "message": f"Server error: {e}"}), 500

    @app.route('/api/flats', methods=['GET'])
    def api_flats():
        location = request.args.get('location', 'all')
        if location not in SEARCH_LOCATIONS:
            return jsonify({"success": False, "message": f"Unknown location '{location}'."}), 400
        flats = manager.get_flats_by_location(location, dataset.flats)
        return jsonify({"success": True, "flats": [f.to_dict() for f in flats]})

    @app.route('/health')
    def health():
        return jsonify({"status": "ok"})

    return app


app = create_app()

if __name__ == '__main__':
    app.run(debug=False, host=config.HOST, port=config.PORT)
