"""
ROI Navigator - Flask API Server
JSON surface over the calculation engine, the archetype registry and the
workbook export. Stateless: every request carries its own input profile.
"""
import logging
import math
import os
from flask import Flask, jsonify, request, send_file
from engines.benchmarks import (
    DEFAULT_BENCHMARKS, BENCHMARK_VERSION, INDUSTRIES, PROCESS_TYPES, COMPANY_SIZES, TEAM_LOCATIONS,
)
from engines.archetypes import (
    list_archetypes, get_archetype, get_archetype_input_defaults, validate_archetype_inputs,
    map_archetype_inputs, archetype_formulas,
)
from engines.classification import classify_archetype, CLASSIFICATION_QUESTIONS
from engines.calculations import normalize_inputs, run_calculations
from engines.recommendations import get_recommendation, get_risk_mitigations
from engines.workbook import build_workbook

logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
                    format='%(asctime)s %(levelname)s %(message)s')

app = Flask(__name__)
app.config['EXPORT_DIR'] = os.environ.get('EXPORT_DIR', os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data'))


def _sanitize_for_json(obj):
    """Convert sets/tuples to lists and NaN/inf to None."""
    if isinstance(obj, set):
        return sorted(list(obj))
    elif isinstance(obj, dict):
        return {k: _sanitize_for_json(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_sanitize_for_json(v) for v in obj]
    elif isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


def _body():
    return request.get_json(force=True, silent=True) or {}


def _error(e, status):
    if status >= 500:
        logging.exception(f"{request.method} {request.path} failed")
    return jsonify({'status': 'error', 'message': str(e)}), status


@app.route('/api/health')
def api_health():
    return jsonify({'status': 'ok', 'benchmarkVersion': BENCHMARK_VERSION})


@app.route('/api/benchmarks')
def api_benchmarks():
    bm = DEFAULT_BENCHMARKS
    return jsonify(_sanitize_for_json({
        'version': bm.version,
        'industries': INDUSTRIES,
        'processTypes': PROCESS_TYPES,
        'companySizes': COMPANY_SIZES,
        'teamLocations': TEAM_LOCATIONS,
        'states': bm.keys('stateRdCredit'),
        'constants': dict(bm.table('constants')),
        'sources': bm.to_dict()['sources'],
    }))


@app.route('/api/calculate', methods=['POST'])
def api_calculate():
    """Full ROI result for one input profile, plus verdict and mitigations."""
    try:
        inputs = _body()
        results = run_calculations(inputs)
        return jsonify(_sanitize_for_json({
            'status': 'ok',
            'results': results,
            'recommendation': get_recommendation(results),
            'riskMitigations': get_risk_mitigations(normalize_inputs(inputs)),
        }))
    except (LookupError, ValueError) as e:
        return _error(e, 400)
    except Exception as e:
        return _error(e, 500)


@app.route('/api/classify', methods=['GET', 'POST'])
def api_classify():
    if request.method == 'GET':
        return jsonify({'questions': CLASSIFICATION_QUESTIONS})
    try:
        body = _body()
        answers = body.get('answers', body)
        return jsonify({'status': 'ok', 'matches': classify_archetype(answers, top=int(body.get('top', 3)))})
    except (TypeError, ValueError) as e:
        return _error(e, 400)


@app.route('/api/archetypes')
def api_archetypes():
    return jsonify(list_archetypes())


@app.route('/api/archetypes/<archetype_id>')
def api_archetype(archetype_id):
    schema = get_archetype(archetype_id)
    if not schema:
        return jsonify({'status': 'error', 'message': f"Unknown archetype: {archetype_id}"}), 404
    return jsonify({
        'id': schema['id'], 'label': schema['label'], 'processType': schema['processType'],
        'description': schema['description'], 'inputs': schema['inputs'],
        'mappings': archetype_formulas(archetype_id),
    })


@app.route('/api/archetypes/<archetype_id>/defaults')
def api_archetype_defaults(archetype_id):
    if not get_archetype(archetype_id):
        return jsonify({'status': 'error', 'message': f"Unknown archetype: {archetype_id}"}), 404
    return jsonify(get_archetype_input_defaults(archetype_id))


@app.route('/api/archetypes/<archetype_id>/validate', methods=['POST'])
def api_archetype_validate(archetype_id):
    errors = validate_archetype_inputs(archetype_id, _body())
    if errors:
        return jsonify({'status': 'invalid', 'errors': errors}), 400
    return jsonify({'status': 'ok', 'errors': []})


@app.route('/api/archetypes/<archetype_id>/map', methods=['POST'])
def api_archetype_map(archetype_id):
    if not get_archetype(archetype_id):
        return jsonify({'status': 'error', 'message': f"Unknown archetype: {archetype_id}"}), 404
    return jsonify(_sanitize_for_json({'status': 'ok', 'overrides': map_archetype_inputs(archetype_id, _body())}))


@app.route('/api/export', methods=['POST'])
def api_export():
    """Live-formula Excel workbook for the posted input profile."""
    try:
        wb = build_workbook(_body())
        export_dir = app.config['EXPORT_DIR']
        os.makedirs(export_dir, exist_ok=True)
        export_path = os.path.join(export_dir, 'roi_navigator.xlsx')
        wb.save(export_path)
        logging.info(f"Workbook exported to {export_path}")
        return send_file(export_path, as_attachment=True, download_name='ROI_Navigator.xlsx',
                         mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')
    except (LookupError, ValueError) as e:
        return _error(e, 400)
    except Exception as e:
        return _error(e, 500)


if __name__ == '__main__':
    app.run(debug=False, host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
