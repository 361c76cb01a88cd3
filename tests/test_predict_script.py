import json

import pytest

import predict


def _write(tmp_path, payload):
    path = tmp_path / 'patient.json'
    path.write_text(json.dumps(payload), encoding='utf-8')
    return str(path)


def test_prints_prediction(tmp_path, capsys, high_risk_visits, high_risk_patient):
    path = _write(tmp_path, {'visits': high_risk_visits, 'patient': high_risk_patient})

    assert predict.run(path, seed='3') == 0

    output = json.loads(capsys.readouterr().out)
    assert output['deliveryMode']['CSection'] == 0.7
    assert output['metadata']['source'] == 'rule-based-engine'


def test_seeded_runs_match(tmp_path, capsys, routine_visits):
    path = _write(tmp_path, {'visits': routine_visits, 'patient': {}})

    predict.run(path, seed='11')
    first = json.loads(capsys.readouterr().out)
    predict.run(path, seed='11')
    second = json.loads(capsys.readouterr().out)

    assert first['progression'] == second['progression']


def test_empty_payload_gives_fallback(tmp_path, capsys):
    path = _write(tmp_path, {})

    assert predict.run(path) == 0
    assert json.loads(capsys.readouterr().out)['isFallback'] is True


def test_missing_file(tmp_path, capsys):
    assert predict.run(str(tmp_path / 'absent.json')) == 1
    assert 'not found' in capsys.readouterr().out


def test_invalid_json(tmp_path, capsys):
    path = tmp_path / 'broken.json'
    path.write_text('{visits: ', encoding='utf-8')

    assert predict.run(str(path)) == 1
    assert 'Invalid JSON' in capsys.readouterr().out


def test_non_object_payload(tmp_path, capsys):
    assert predict.run(_write(tmp_path, [1, 2, 3])) == 1


@pytest.mark.parametrize('seed', ['--5', 'abc', '1.5'])
def test_rejects_non_integer_seed(tmp_path, capsys, routine_visits, seed):
    path = _write(tmp_path, {'visits': routine_visits, 'patient': {}})

    assert predict.run(path, seed=seed) == 1
    assert 'Seed must be an integer' in capsys.readouterr().out


def test_directory_path(tmp_path, capsys):
    assert predict.run(str(tmp_path)) == 1
    assert 'Could not read' in capsys.readouterr().out


def test_file_not_utf8(tmp_path, capsys):
    path = tmp_path / 'latin1.json'
    path.write_bytes(b'{"patient": {"FIRST_NAME": "Ren\xe9e"}}')

    assert predict.run(str(path)) == 1
    assert 'Could not read' in capsys.readouterr().out
