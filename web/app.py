"""
N-gram Language Model Web API

A Flask application for training a Witten-Bell n-gram model in the
background and querying its probabilities over HTTP.
"""

import threading
from pathlib import Path
from typing import Optional, Dict

from flask import Flask, jsonify, request

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from wblm import LangModel, LMConfig, LMError, InvalidNGramError


app = Flask(__name__)

# Global state
model: Optional[LangModel] = None
training_status: Dict = {
    'is_training': False,
    'progress': 0,
    'stage': 'idle',
    'message': '',
    'error': None,
    'stats': None
}
training_lock = threading.Lock()


def train_model_async(config: LMConfig):
    """Train model in background thread."""
    global model, training_status

    try:
        with training_lock:
            training_status['is_training'] = True
            training_status['progress'] = 0
            training_status['stage'] = 'training'
            training_status['message'] = 'Training model...'
            training_status['error'] = None

        def progress_callback(current, total, stage=""):
            with training_lock:
                training_status['progress'] = current
                training_status['stage'] = stage
                training_status['message'] = f'{stage}: {current:,} sentences'

        new_model = LangModel(config, progress_callback=progress_callback)

        # Only a fully trained model is ever published.
        model = new_model

        with training_lock:
            training_status['stage'] = 'complete'
            training_status['message'] = 'Training complete!'
            training_status['stats'] = new_model.training_stats
            training_status['is_training'] = False

    except Exception as e:
        with training_lock:
            training_status['error'] = str(e)
            training_status['is_training'] = False
            training_status['stage'] = 'error'
            training_status['message'] = f'Error: {str(e)}'


def get_json_object() -> Optional[Dict]:
    """Return the JSON request body if it is an object, else None."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


@app.route('/api/train', methods=['POST'])
def api_train():
    """Start model training."""
    data = get_json_object()
    if data is None:
        return jsonify({'error': 'Expected a JSON object'}), 400

    try:
        config = LMConfig.from_params({k: str(v) for k, v in data.items() if v is not None})
    except LMError as e:
        return jsonify({'error': str(e)}), 400

    with training_lock:
        if training_status['is_training']:
            return jsonify({'error': 'Training already in progress'}), 400
        training_status['is_training'] = True

    thread = threading.Thread(target=train_model_async, args=(config,))
    thread.daemon = True
    thread.start()

    return jsonify({'message': 'Training started'})


@app.route('/api/status')
def api_status():
    """Get training status."""
    with training_lock:
        return jsonify(training_status)


@app.route('/api/model/info')
def api_model_info():
    """Get model information."""
    if model is None:
        return jsonify({'error': 'No model trained'}), 400

    return jsonify({
        'state': model.state.value,
        'n': model.n,
        'vocab_size': model.vocab_size,
        'config': model.config.to_dict(),
        'stats': model.training_stats,
        'top_ngrams': [
            {'ngram': list(ngram), 'count': count}
            for ngram, count in model.get_top_ngrams(model.n, top_k=10)
        ]
    })


@app.route('/api/prob', methods=['POST'])
def api_prob():
    """Smoothed probability of the last token of an n-gram."""
    if model is None:
        return jsonify({'error': 'No model trained'}), 400

    data = get_json_object()
    if data is None:
        return jsonify({'error': 'Expected a JSON object'}), 400

    words = data.get('ngram', [])
    if isinstance(words, str):
        words = words.split()
    if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
        return jsonify({'error': 'ngram must be a string or a list of strings'}), 400

    try:
        prob = model.get_prob(model.words_to_ngram(words))
    except InvalidNGramError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({
        'ngram': words,
        'indices': list(model.words_to_ngram(words)),
        'probability': prob
    })


@app.route('/api/perplexity', methods=['POST'])
def api_perplexity():
    """Calculate perplexity for given sentences."""
    if model is None:
        return jsonify({'error': 'No model trained'}), 400

    data = get_json_object()
    if data is None:
        return jsonify({'error': 'Expected a JSON object'}), 400

    sentences = data.get('sentences', [])
    if not isinstance(sentences, list) or not all(isinstance(s, str) for s in sentences):
        return jsonify({'error': 'sentences must be a list of strings'}), 400
    sentences = [sent for sent in sentences if sent.strip()]

    if not sentences:
        return jsonify({'error': 'No sentences provided'}), 400

    return jsonify({
        'perplexity': model.perplexity(sentences),
        'num_sentences': len(sentences)
    })


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='N-gram Model Web API')
    parser.add_argument('--host', default='127.0.0.1', help='Host to bind to')
    parser.add_argument('--port', type=int, default=5000, help='Port to bind to')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')

    args = parser.parse_args()

    print(f"\nStarting N-gram Language Model API on http://{args.host}:{args.port}\n")

    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)
