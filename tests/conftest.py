import pytest
from fastapi.testclient import TestClient

from mood_trainer.config import Settings
from mood_trainer.main import create_app

HEADER = "Overview,Sentiment_Score,Valence_Score,Arousal_Score,Dominance_Score,Tempo"
ROWS = [
    '"A hero\'s journey",0.8,0.5,0.6,0.7,120',
    '"A heist, a betrayal, a chase",0.3,0.2,0.9,0.8,140',
    '"Quiet love story",0.9,0.9,0.3,0.4,80',
    '"A storm at sea",0.4,0.3,0.85,0.6,130',
    '"Grief and recovery",0.1,0.2,0.3,0.2,70',
    '"A festival of lights",0.7,0.8,0.5,0.5,110',
    '"A long walk home",0.5,0.5,0.2,0.3,75',
]
INDEX_HTML = "<html><body><script>const data = <!-- Backend will populate this JSON -->;</script></body></html>"

PREFERRED = {"sentiment": 0.8, "valence": 0.5, "arousal": 0.6, "dominance": 0.7, "tempo": 120}
NOT_PREFERRED = {"sentiment": 0.1, "valence": 0.2, "arousal": 0.3, "dominance": 0.2, "tempo": 70}


def write_csv(path, header=HEADER, rows=ROWS):
    path.write_text("\n".join([header] + list(rows)) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def csv_file(tmp_path):
    return write_csv(tmp_path / "movies_training.csv")


@pytest.fixture
def settings(tmp_path, csv_file):
    index = tmp_path / "index.html"
    index.write_text(INDEX_HTML, encoding="utf-8")
    return Settings(
        csv_path=str(csv_file),
        index_path=str(index),
        static_dir=str(tmp_path),
        train_iterations=50,
    )


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
