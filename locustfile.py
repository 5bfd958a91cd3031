from locust import HttpUser, task, between
import random

FEATURES = ("sentiment", "valence", "arousal", "dominance", "tempo")


def random_movie():
    movie = {name: random.random() for name in FEATURES}
    movie["tempo"] = random.uniform(60, 180)
    return movie


class APISimUser(HttpUser):
    wait_time = between(0.01, 0.2)

    @task(3)
    def get_sample(self):
        self.client.get("/test")

    @task(3)
    def send_feedback(self):
        self.client.post("/add-feedback", json={
            "preferredText": random_movie(),
            "notPreferredText": random_movie(),
        })

    @task(1)
    def train(self):
        self.client.post("/train")
