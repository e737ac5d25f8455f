import json
import os

import pytest

from models import Quiz
from services.lifecycle import transfer
from storage import JsonFileRepository, Store
from utils.errors import NotFound, StorageError


def _quiz(quiz_id='q1', name='Q1'):
    return Quiz(id=quiz_id, name=name, questions=[{'pergunta': 'P?'}], created_by='admin')


@pytest.fixture
def repo(tmp_path):
    return JsonFileRepository('quizzes', Quiz, str(tmp_path / 'quizzes.json'))


def test_missing_file_reads_as_empty(repo):
    assert repo.list() == []
    assert repo.count() == 0


def test_ensure_file_creates_empty_array(repo):
    assert repo.ensure_file() is True
    assert repo.ensure_file() is False
    with open(repo.path, encoding='utf-8') as fp:
        assert json.load(fp) == []


def test_insert_persists_readable_json(repo):
    repo.insert(_quiz(name='Matemática'))

    with open(repo.path, encoding='utf-8') as fp:
        raw = fp.read()
    assert 'Matemática' in raw  # sem escapes \u
    assert raw.startswith('[\n  {')
    assert repo.find('q1').name == 'Matemática'


def test_write_leaves_no_temporary_files(repo, tmp_path):
    repo.insert(_quiz('a'))
    repo.insert(_quiz('b'))
    repo.remove('a')
    assert sorted(os.listdir(tmp_path)) == ['quizzes.json']


def test_update_and_remove(repo):
    quiz = repo.insert(_quiz())
    quiz.name = 'Renomeado'
    repo.update(quiz)
    assert repo.find('q1').name == 'Renomeado'

    removed = repo.remove('q1')
    assert removed.name == 'Renomeado'
    assert repo.remove('q1') is None


def test_update_missing_record_raises_not_found(repo):
    with pytest.raises(NotFound):
        repo.update(_quiz('fantasma'))


def test_get_or_404_uses_message(repo):
    with pytest.raises(NotFound) as exc:
        repo.get_or_404('x', 'Quiz não encontrado')
    assert exc.value.message == 'Quiz não encontrado'


def test_find_by_matches_json_keys(repo):
    repo.insert(_quiz('a', 'Alfa'))
    repo.insert(_quiz('b', 'Beta'))
    assert repo.find_by(nome='Beta').id == 'b'
    assert repo.find_by(nome='Gama') is None


def test_clear_returns_count(repo):
    repo.insert(_quiz('a'))
    repo.insert(_quiz('b'))
    assert repo.clear() == 2
    assert repo.list() == []


def test_corrupt_file_raises_storage_error_and_is_kept(repo):
    with open(repo.path, 'w', encoding='utf-8') as fp:
        fp.write('{ isto não é json')

    with pytest.raises(StorageError) as exc:
        repo.list()
    assert exc.value.retryable is True

    with open(repo.path, encoding='utf-8') as fp:
        assert fp.read() == '{ isto não é json'


def test_non_array_file_is_rejected(repo):
    with open(repo.path, 'w', encoding='utf-8') as fp:
        json.dump({'id': 'q1'}, fp)
    with pytest.raises(StorageError):
        repo.list()


def test_store_creates_every_collection(tmp_path):
    store = Store.from_json_dir(str(tmp_path))
    store.ensure_collections()

    assert sorted(os.listdir(tmp_path)) == sorted([
        'usuarios.json', 'cadastros_pendentes.json', 'quizzes.json', 'quizzes_arquivados.json',
        'quizzes_excluidos.json', 'pdfs.json', 'pdfs_excluidos.json'
    ])
    assert set(store.counts().values()) == {0}


class FailingRemoveRepository(JsonFileRepository):
    def _delete(self, record_id):
        raise StorageError('disco cheio')


class FailingInsertRepository(JsonFileRepository):
    def _append(self, data):
        raise StorageError('disco cheio')


def _store_with(tmp_path, **overrides):
    store = Store.from_json_dir(str(tmp_path))
    for attr, repository_class in overrides.items():
        original = store.repositories[attr]
        replacement = repository_class(original.name, original.model, original.path)
        store.repositories[attr] = replacement
        setattr(store, attr, replacement)
    return store


def test_transfer_moves_record(tmp_path):
    store = Store.from_json_dir(str(tmp_path))
    quiz = store.quizzes.insert(_quiz())

    transfer(store, quiz, store.quizzes, store.archived_quizzes, 'arquivar quiz')

    assert store.quizzes.list() == []
    assert [q.id for q in store.archived_quizzes.list()] == ['q1']


def test_transfer_compensates_when_source_removal_fails(tmp_path):
    store = _store_with(tmp_path, quizzes=FailingRemoveRepository)
    store.quizzes.insert(_quiz())

    with pytest.raises(StorageError):
        transfer(store, _quiz(), store.quizzes, store.archived_quizzes, 'arquivar quiz')

    assert [q.id for q in store.quizzes.list()] == ['q1']
    assert store.archived_quizzes.list() == []


def test_transfer_leaves_source_when_insert_fails(tmp_path):
    store = _store_with(tmp_path, archived_quizzes=FailingInsertRepository)
    store.quizzes.insert(_quiz())

    with pytest.raises(StorageError):
        transfer(store, _quiz(), store.quizzes, store.archived_quizzes, 'arquivar quiz')

    assert [q.id for q in store.quizzes.list()] == ['q1']


def test_transfer_of_vanished_record_is_undone(tmp_path):
    store = Store.from_json_dir(str(tmp_path))

    with pytest.raises(StorageError):
        transfer(store, _quiz(), store.quizzes, store.archived_quizzes, 'arquivar quiz')

    assert store.archived_quizzes.list() == []
