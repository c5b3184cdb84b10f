import pytest

from bloodlink import create_app
from bloodlink.config import TestingConfig
from bloodlink.storage import DonorRepository, MemoryStore


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        DATA_DIR = str(tmp_path)

    return create_app(Config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def repo(app):
    return app.extensions['bloodlink']


@pytest.fixture
def memory_repo():
    return DonorRepository(MemoryStore())


@pytest.fixture
def make_record():
    def make(donor_id, blood_group, name='Donor', age=30, contact='555', city='X'):
        return {
            'id': donor_id,
            'name': name,
            'age': age,
            'blood_group': blood_group,
            'contact': contact,
            'city': city,
            'date_registered': '2024-01-01T10:00:00.000Z'
        }
    return make
