import pytest

from wblm import LMConfig
from web import app as web_app


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(web_app, "model", None)
    monkeypatch.setitem(web_app.training_status, "stage", "idle")
    monkeypatch.setitem(web_app.training_status, "is_training", False)
    monkeypatch.setitem(web_app.training_status, "error", None)
    monkeypatch.setitem(web_app.training_status, "stats", None)
    web_app.app.config['TESTING'] = True
    with web_app.app.test_client() as client:
        yield client


def test_queries_need_a_model(client):
    assert client.post('/api/prob', json={'ngram': ['a']}).status_code == 400
    assert client.get('/api/model/info').status_code == 400


def test_train_rejects_bad_config(client):
    response = client.post('/api/train', json={'vocab': 'v.syms'})
    assert response.status_code == 400
    assert 'train' in response.get_json()['error']


def test_train_and_query(client, vocab_file, corpus_file):
    web_app.train_model_async(LMConfig(vocab=vocab_file, train=corpus_file, n=2))

    status = client.get('/api/status').get_json()
    assert status['stage'] == 'complete'
    assert status['stats']['num_sentences'] == 2

    info = client.get('/api/model/info').get_json()
    assert info['n'] == 2
    assert info['vocab_size'] == 5
    assert info['state'] == 'ready'

    response = client.post('/api/prob', json={'ngram': ['a', 'b']})
    assert response.status_code == 200
    assert response.get_json()['probability'] == pytest.approx(13 / 35)
    assert response.get_json()['indices'] == [1, 2]

    response = client.post('/api/prob', json={'ngram': 'a b a'})
    assert response.status_code == 400

    response = client.post('/api/perplexity', json={'sentences': ['a b a', ' ']})
    assert response.get_json()['num_sentences'] == 1
    assert response.get_json()['perplexity'] > 1.0


def test_failed_training_reports_error(client, vocab_file, tmp_path):
    web_app.train_model_async(LMConfig(vocab=vocab_file, train=str(tmp_path / "missing.txt")))
    status = client.get('/api/status').get_json()
    assert status['stage'] == 'error'
    assert status['error']
    assert client.get('/api/model/info').status_code == 400


def test_undecodable_corpus_does_not_block_training(client, vocab_file, corpus_file, tmp_path):
    corpus = tmp_path / "latin1.txt"
    corpus.write_bytes(b"a \xff b\n")
    web_app.train_model_async(LMConfig(vocab=vocab_file, train=str(corpus), n=2))

    status = client.get('/api/status').get_json()
    assert status['is_training'] is False
    assert status['stage'] == 'error'

    web_app.train_model_async(LMConfig(vocab=vocab_file, train=corpus_file, n=2))
    assert client.get('/api/status').get_json()['stage'] == 'complete'


def test_second_train_request_is_rejected(client, monkeypatch, vocab_file, corpus_file):
    monkeypatch.setattr(web_app, "train_model_async", lambda config: None)
    body = {'vocab': vocab_file, 'train': corpus_file, 'n': 2}

    assert client.post('/api/train', json=body).status_code == 200
    response = client.post('/api/train', json=body)
    assert response.status_code == 400
    assert 'in progress' in response.get_json()['error']


@pytest.mark.parametrize("url, body", [
    ('/api/train', ['vocab', 'train']),
    ('/api/prob', ['a', 'b']),
    ('/api/prob', {'ngram': 5}),
    ('/api/prob', {'ngram': ['a', 5]}),
    ('/api/perplexity', {'sentences': [5]}),
    ('/api/perplexity', {'sentences': 'a b'}),
])
def test_malformed_bodies(client, bigram_model, url, body):
    web_app.model = bigram_model
    assert client.post(url, json=body).status_code == 400


def test_model_info_lists_top_ngrams(client, bigram_model):
    web_app.model = bigram_model
    info = client.get('/api/model/info').get_json()
    assert info['top_ngrams'][0] == {'ngram': ['<s>', 'a'], 'count': 2}
    assert info['stats']['total_ngrams'] == 28
