"""Flask web application for the ROI calculator."""

from flask import Flask, jsonify, request

from src.core.config import get_flask_secret, load_environment
from src.core.store import InMemoryAssessmentStore, InMemoryPricingSettingsStore
from src.interfaces.handlers import CalculatorWorkflow
from src.shared.errors import ValidationError
from src.shared.logging import setup_logging
from src.shared.metrics import configure_metrics
from src.shared.tracing import configure_tracing
from src.web.handlers import WebHandlers

# Load environment and configure Flask
load_environment()

# Log level comes from APP_LOG_LEVEL (default INFO)
setup_logging(name="roi_calculator_web", service_name="roi-calculator-web")

# Configure OpenTelemetry traces and metrics (OTLP/gRPC) when ENABLE_OTEL=true
configure_tracing(service_name="roi-calculator-web")
configure_metrics()

app = Flask(__name__)
app.secret_key = get_flask_secret()

# Initialize shared components
settings_store = InMemoryPricingSettingsStore()
assessment_store = InMemoryAssessmentStore()
workflow = CalculatorWorkflow(settings_store, assessment_store)
handlers = WebHandlers(workflow)


@app.errorhandler(ValidationError)
def validation_error(error):
    """Map bad request payloads to 400."""
    return jsonify({'error': str(error)}), 400


@app.route('/api/roi/workflows', methods=['GET'])
def workflows():
    """Workflow catalog, industries and multiplier choices."""
    return jsonify(handlers.handle_catalog())


@app.route('/api/roi/plans', methods=['GET'])
def plans():
    """Plan tier catalog."""
    return jsonify(handlers.handle_plans())


@app.route('/api/roi/segments', methods=['GET'])
def segments():
    """Metadata for every industry segment."""
    return jsonify(handlers.handle_segments())


@app.route('/api/roi/segments/<segment>', methods=['GET', 'POST'])
def segment_defaults(segment):
    """Pre-fill a state from segment defaults (onto the posted state, if any)."""
    state_data = request.get_json(silent=True) if request.method == 'POST' else None
    result = handlers.handle_segment(segment, state_data)
    if result is None:
        return jsonify({'error': f'Unknown segment: {segment}'}), 404
    return jsonify(result)


@app.route('/api/roi/calculate', methods=['POST'])
def calculate():
    """Calculate ROI results and derived pricing for a state."""
    data = request.get_json(silent=True)
    try:
        return jsonify(handlers.handle_calculate(data))
    except ValidationError:
        raise
    except Exception as e:
        return jsonify({'error': str(e)}), 500


@app.route('/api/roi/submit', methods=['POST'])
def submit():
    """Record an ROI lead submission."""
    data = request.get_json(silent=True)
    try:
        return jsonify(handlers.handle_submit(data))
    except ValidationError:
        raise
    except Exception:
        return jsonify({'error': 'Internal server error'}), 500


@app.route('/api/roi/settings', methods=['GET'])
def get_settings():
    """Current pricing settings."""
    return jsonify(handlers.handle_get_settings())


@app.route('/api/roi/settings', methods=['PUT'])
def save_settings():
    """Save pricing settings."""
    return jsonify(handlers.handle_save_settings(request.get_json(silent=True)))


@app.route('/api/roi/settings', methods=['DELETE'])
def reset_settings():
    """Reset pricing settings to the configured defaults."""
    return jsonify(handlers.handle_reset_settings())


@app.route('/health')
def health():
    """Health check endpoint."""
    return jsonify({'status': 'healthy'})


if __name__ == '__main__':
    from src.core.config import get_port

    app.run(host='0.0.0.0', port=get_port(), debug=False)
