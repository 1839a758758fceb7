import httpx
import pytest

from config.config import Config, NluConfig, QnaConfig
from nlu import NLUPipeline
from nlu.corpora import Corpus
from nlu.extractors import CorpusExtractor
from nlu.models import ClassifierResult, IntentType
from utils.errors import AuthenticationError, ConfigurationError, QnaError

from tests.helpers import StubClassifier, StubQna, make_config

RANKED = [
    ClassifierResult(name="travel", value=0.9),
    ClassifierResult(name="weather", value=0.7),
    ClassifierResult(name="greetings", value=0.2),
]


def city_extractor():
    return CorpusExtractor("city", Corpus(["new york", "paris"]))


def make_pipeline(config, results=None, qna=None, **kwargs):
    classifier = StubClassifier(RANKED if results is None else results)
    pipeline = NLUPipeline(config, classifier=classifier, extractors=[city_extractor()], qna=qna, **kwargs)
    return pipeline, classifier


def test_missing_threshold_fails_at_construction():
    with pytest.raises(ConfigurationError):
        NLUPipeline(Config(NLU=NluConfig(INTENT_THRESHOLD=None)), classifier=StubClassifier())


def test_missing_classifier_fails_at_construction():
    with pytest.raises(ConfigurationError):
        NLUPipeline(make_config())


def test_missing_qna_credentials_fail_at_construction():
    config = Config(NLU=NluConfig(INTENT_THRESHOLD=0.5, QNA=QnaConfig(WHEN="before")))
    with pytest.raises(ConfigurationError):
        NLUPipeline(config, classifier=StubClassifier())


async def test_classifier_only_single_intent():
    pipeline, classifier = make_pipeline(make_config())
    result = await pipeline.compute("I want to go to paris")

    assert [i.name for i in result.intents] == ["travel"]
    assert result.intents[0].type is IntentType.INTENT
    assert [e.value for e in result.entities] == ["paris"]
    sentence, entities = classifier.calls[0]
    assert sentence == "I want to go to paris"
    assert [e.dim for e in entities] == ["city"]


async def test_multi_intent_keeps_two_in_rank_order():
    pipeline, _ = make_pipeline(make_config(multi_intent=True))
    result = await pipeline.compute("trip and weather")
    assert [i.name for i in result.intents] == ["travel", "weather"]


async def test_threshold_is_exclusive():
    pipeline, _ = make_pipeline(make_config(threshold=0.9))
    result = await pipeline.compute("hello")
    assert result.intents == []


async def test_custom_intent_filter_receives_context():
    seen = {}

    def only_weather(intents, context):
        seen["context"] = context
        return [i.name for i in intents if i.name == "weather"]

    pipeline, _ = make_pipeline(make_config(), intent_filter=only_weather)
    result = await pipeline.compute("rain?", {"user_id": "u1"})
    assert [i.name for i in result.intents] == ["weather"]
    assert seen["context"] == {"user_id": "u1"}


async def test_async_intent_filter():
    async def reverse(intents, context):
        return [i.name for i in reversed(intents)]

    pipeline, _ = make_pipeline(make_config(), intent_filter=reverse)
    result = await pipeline.compute("hello")
    assert [i.name for i in result.intents] == ["greetings"]


async def test_before_strict_single_match_skips_classifier():
    qna = StubQna([{"answer": "We open at 9"}])
    pipeline, classifier = make_pipeline(make_config(when="before", strict=True), qna=qna)
    result = await pipeline.compute("when do you open?")

    assert len(result.intents) == 1
    intent = result.intents[0]
    assert intent.type is IntentType.QNA
    assert intent.name == "qnas"
    assert intent.answers == [[{"value": "We open at 9"}]]
    assert result.entities == []
    assert classifier.calls == []


async def test_before_strict_ambiguous_match_falls_back_to_classifier():
    qna = StubQna([{"answer": "a"}, {"answer": "b"}])
    pipeline, classifier = make_pipeline(make_config(when="before", strict=True), qna=qna)
    result = await pipeline.compute("paris")

    assert [i.name for i in result.intents] == ["travel"]
    assert len(classifier.calls) == 1


async def test_before_non_strict_takes_best_match():
    qna = StubQna([{"answer": "best"}, {"answer": "other"}])
    pipeline, classifier = make_pipeline(make_config(when="before", strict=False), qna=qna)
    result = await pipeline.compute("question")

    assert result.intents[0].answers == [[{"value": "best"}]]
    assert classifier.calls == []


async def test_after_prefers_classifier_intents():
    qna = StubQna([{"answer": "unused"}])
    pipeline, _ = make_pipeline(make_config(when="after"), qna=qna)
    result = await pipeline.compute("go to new york")

    assert [i.name for i in result.intents] == ["travel"]
    assert [e.value for e in result.entities] == ["new york"]
    assert qna.calls == []


async def test_after_falls_back_to_qna():
    qna = StubQna([{"answer": "42"}])
    pipeline, _ = make_pipeline(make_config(when="after"), results=[], qna=qna)
    result = await pipeline.compute("meaning of life in paris")

    assert result.intents[0].is_qna()
    assert result.entities == []


async def test_after_without_any_match_keeps_entities():
    qna = StubQna([])
    pipeline, _ = make_pipeline(make_config(when="after"), results=[ClassifierResult("travel", 0.1)], qna=qna)
    result = await pipeline.compute("paris")

    assert result.intents == []
    assert [e.value for e in result.entities] == ["paris"]
    assert qna.calls == ["paris"]


async def test_qna_forbidden_becomes_authentication_error():
    qna = StubQna(error=QnaError("forbidden", status_code=403))
    pipeline, _ = make_pipeline(make_config(when="before"), qna=qna)
    with pytest.raises(AuthenticationError):
        await pipeline.compute("hello")


async def test_other_qna_errors_propagate():
    qna = StubQna(error=QnaError("boom", status_code=500))
    pipeline, _ = make_pipeline(make_config(when="before"), qna=qna)
    with pytest.raises(QnaError):
        await pipeline.compute("hello")


async def test_qna_timeout_is_not_an_empty_result():
    qna = StubQna(error=httpx.ReadTimeout("timed out"))
    pipeline, _ = make_pipeline(make_config(when="after"), results=[], qna=qna)
    with pytest.raises(httpx.ReadTimeout):
        await pipeline.compute("hello")


async def test_classifier_errors_propagate():
    class FailingClassifier(StubClassifier):
        async def compute(self, sentence, entities):
            raise RuntimeError("model unavailable")

    pipeline = NLUPipeline(make_config(), classifier=FailingClassifier())
    with pytest.raises(RuntimeError):
        await pipeline.compute("hello")


async def test_boolean_entities_are_extracted():
    pipeline, _ = make_pipeline(make_config(), results=[])
    result = await pipeline.compute("yes")
    assert result.get_entities("system:boolean")[0].value is True
