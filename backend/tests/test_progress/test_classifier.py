"""DeedClassifier: acta → clave de etapa"""

import pytest

from expropia.services.progress.classifier import DeedClassifier, build_alias_index
from expropia.services.progress.stages import (
    ACTA_COMPARECENCIA,
    ACTA_JUSTIPRECIO,
    ACTA_OCUPACION,
    ACTA_PREVIA,
)
from factories import make_deed


@pytest.fixture
def classifier() -> DeedClassifier:
    return DeedClassifier()


class TestClassify:
    """Clasificación por tipo_acta / tipo"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("previa", ACTA_PREVIA),
            ("ocupacion", ACTA_OCUPACION),
            ("justiprecio", ACTA_JUSTIPRECIO),
            ("mutuo_acuerdo", ACTA_JUSTIPRECIO),
            ("comparecencia", ACTA_COMPARECENCIA),
        ],
    )
    def test_tipo_acta(self, classifier, value, expected):
        assert classifier.classify(make_deed(tipo_acta=value)) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("previa", ACTA_PREVIA),
            ("mutuo_acuerdo", ACTA_JUSTIPRECIO),
            ("comparecencia", ACTA_COMPARECENCIA),
        ],
    )
    def test_legacy_tipo(self, classifier, value, expected):
        """Campo heredado `tipo`"""
        assert classifier.classify(make_deed(tipo=value)) == expected

    def test_tipo_acta_has_priority(self, classifier):
        """Con ambos campos reconocidos, manda tipo_acta"""
        deed = make_deed(tipo_acta="ocupacion", tipo="previa")
        assert classifier.classify(deed) == ACTA_OCUPACION

    def test_falls_back_when_tipo_acta_unknown(self, classifier):
        """tipo_acta sin alias → se prueba tipo"""
        deed = make_deed(tipo_acta="otra", tipo="justiprecio")
        assert classifier.classify(deed) == ACTA_JUSTIPRECIO

    def test_unclassified(self, classifier):
        """Sin coincidencia → None"""
        assert classifier.classify(make_deed(tipo_acta="desconocida")) is None
        assert classifier.classify(make_deed()) is None

    def test_exact_match(self, classifier):
        """Los alias se comparan tal cual"""
        assert classifier.classify(make_deed(tipo_acta="Previa")) is None


class TestCustomRules:
    """Alias nuevos como datos"""

    def test_new_alias(self):
        rules = [(ACTA_PREVIA, ("previa", "previa_ocupacion"))]
        classifier = DeedClassifier(rules=rules)
        assert classifier.classify(make_deed(tipo="previa_ocupacion")) == ACTA_PREVIA
        assert classifier.classify(make_deed(tipo="ocupacion")) is None

    def test_ambiguous_alias_rejected(self):
        """Un valor en dos etapas → ValueError"""
        with pytest.raises(ValueError):
            build_alias_index([
                (ACTA_PREVIA, ("previa",)),
                (ACTA_OCUPACION, ("previa",)),
            ])

    def test_repeated_alias_same_stage(self):
        index = build_alias_index([(ACTA_PREVIA, ("previa", "previa"))])
        assert index == {"previa": ACTA_PREVIA}
