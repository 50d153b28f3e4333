"""Static question catalog for the school environment survey.

The catalog is the single source of truth shared by the aggregator and the
report pages: an ordered tuple of :class:`Category` objects, each holding
ordered :class:`Statement` objects. A statement carries one phrasing of the
question per respondent group, or :data:`NOT_APPLICABLE` when the group was
never asked about it.

The catalog is configuration, not user data. It is built once at import time
and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

__all__ = [
    "NOT_APPLICABLE",
    "RespondentGroup",
    "Statement",
    "Category",
    "CATALOG",
    "get_category",
]

# Marker used in place of a question text when a group has no such question.
NOT_APPLICABLE = "NA"


class RespondentGroup(str, Enum):
    """The three populations surveyed, in report order."""

    DOCENTES = "docentes"
    ESTUDIANTES = "estudiantes"
    ACUDIENTES = "acudientes"

    @property
    def label(self) -> str:
        """Title-case name used in table headers (``Docentes``)."""
        return self.value.capitalize()

    @property
    def heading(self) -> str:
        """Upper-case name used in section bands (``DOCENTES``)."""
        return self.value.upper()


@dataclass(frozen=True)
class Statement:
    """A thematic statement and its per-group question phrasing."""

    display_text: str
    docentes: str
    estudiantes: str
    acudientes: str

    def question_for(self, group: RespondentGroup) -> Optional[str]:
        """Return the question text for *group*, or ``None`` if not applicable."""
        text = getattr(self, group.value)
        if not text or text == NOT_APPLICABLE:
            return None
        return text

    def applies_to(self, group: RespondentGroup) -> bool:
        return self.question_for(group) is not None


@dataclass(frozen=True)
class Category:
    """Named, ordered group of statements (e.g. *Comunicación*)."""

    key: str
    title: str
    label: str
    color: str
    statements: Tuple[Statement, ...]
    # Detail grid always opens a fresh page for this category.
    starts_new_page: bool = False

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)


COMUNICACION = Category(
    key="comunicacion",
    title="COMUNICACIÓN",
    label="Comunicación",
    color="#2C5282",
    statements=(
        Statement(
            display_text=(
                "Los docentes tienen la disposición de dialogar con las familias sobre "
                "los aprendizajes de los estudiantes en espacios adicionales a la "
                "entrega de notas."
            ),
            docentes=(
                "Tengo la disposición de dialogar con los acudientes sobre los "
                "aprendizajes de los estudiantes en momentos adicionales a la entrega "
                "de notas."
            ),
            estudiantes=(
                "Mis profesores están dispuestos a hablar con mis acudientes sobre cómo "
                "me está yendo en el colegio, en momentos diferentes a la entrega de "
                "notas."
            ),
            acudientes=(
                "Los profesores tienen la disposición para hablar conmigo sobre los "
                "aprendizajes de los estudiantes en momentos adicionales a la entrega "
                "de notas."
            ),
        ),
        Statement(
            display_text=(
                "Los docentes promueven el apoyo de las familias a los estudiantes por "
                "medio de actividades para hacer en casa."
            ),
            docentes=(
                "Promuevo el apoyo de los acudientes al aprendizaje de los estudiantes, "
                "a través de actividades académicas y lúdicas para realizar en espacios "
                "fuera de la institución educativa."
            ),
            estudiantes=(
                "Mis profesores me dejan actividades para hacer en casa, las cuales "
                "necesitan el apoyo de mis acudientes."
            ),
            acudientes=(
                "Los profesores promueven actividades para que apoye en su proceso de "
                "aprendizaje a los estudiantes que tengo a cargo."
            ),
        ),
        Statement(
            display_text=(
                "En la Institución Educativa se promueve la participación de docentes, "
                "familias y estudiantes en la toma de decisiones sobre los objetivos "
                "institucionales."
            ),
            docentes=(
                "En el colegio se promueve mi participación en la toma de decisiones "
                "sobre las metas institucionales."
            ),
            estudiantes=(
                "En mi colegio se promueve mi participación en la toma de decisiones "
                "sobre las metas institucionales."
            ),
            acudientes=(
                "En el colegio se promueve mi participación en la toma de decisiones "
                "sobre las metas institucionales."
            ),
        ),
        Statement(
            display_text=(
                "En la Institución Educativa se hace reconocimiento público de las "
                "prácticas pedagógicas innovadoras de los docentes."
            ),
            docentes=(
                "En el colegio se hace reconocimiento público de nuestras prácticas "
                "pedagógicas exitosas e innovadoras."
            ),
            estudiantes=(
                "En mi colegio reconocen públicamente las actividades y esfuerzos "
                "exitosos que hacen los profesores para que nosotros aprendamos."
            ),
            acudientes=(
                "En el colegio se hace reconocimiento público de las prácticas "
                "pedagógicas exitosas e innovadoras de los profesores."
            ),
        ),
        Statement(
            display_text=(
                "Los directivos docentes y los diferentes actores de la comunidad se "
                "comunican de manera asertiva."
            ),
            docentes=(
                "La comunicación que tengo con los directivos docentes del colegio es "
                "respetuosa y clara."
            ),
            estudiantes=(
                "La comunicación que tengo con los directivos de mi colegio es "
                "respetuosa y clara."
            ),
            acudientes=(
                "La comunicación que tengo con los directivos docentes del colegio es "
                "respetuosa y clara."
            ),
        ),
        Statement(
            display_text=(
                "Los docentes de la Institución Educativa se comunican de manera "
                "asertiva."
            ),
            docentes="La comunicación que tengo con otros docentes es asertiva.",
            estudiantes="La comunicación entre mis profesores es respetuosa y clara.",
            acudientes=(
                "La comunicación que tengo con los directivos docentes del colegio es "
                "respetuosa y clara."
            ),
        ),
    ),
)

PRACTICAS_PEDAGOGICAS = Category(
    key="practicas_pedagogicas",
    title="PRÁCTICAS PEDAGÓGICAS",
    label="Prácticas pedagógicas",
    color="#2F6B25",
    statements=(
        Statement(
            display_text=(
                "Los intereses y las necesidades de los estudiantes son tenidos en "
                "cuenta en la planeación de las clases."
            ),
            docentes=(
                "Cuando preparo mis clases tengo en cuenta los intereses y necesidades "
                "de los estudiantes."
            ),
            estudiantes=(
                "Los profesores tienen en cuenta mis intereses y afinidades para "
                "escoger lo que vamos a hacer en clase."
            ),
            acudientes=(
                "Los profesores tienen en cuenta los intereses y necesidades de los "
                "estudiantes para escoger los temas que se van a tratar en clase."
            ),
        ),
        Statement(
            display_text=(
                "Los docentes de la Institución Educativa participan en proyectos "
                "transversales con otros colegas."
            ),
            docentes=(
                "Me articulo con profesores de otras áreas y niveles para llevar a cabo "
                "proyectos pedagógicos que mejoren los aprendizajes de los estudiantes."
            ),
            estudiantes=(
                "Los profesores trabajan juntos en proyectos para hacer actividades que "
                "nos ayudan a aprender más y mejor."
            ),
            acudientes=NOT_APPLICABLE,
        ),
        Statement(
            display_text=(
                "Para el desarrollo de los planes de aula, los docentes utilizan "
                "espacios alternativos como bibliotecas, parques, laboratorios, "
                "museos, etc."
            ),
            docentes=(
                "Utilizo diferentes espacios dentro y fuera del colegio como la "
                "biblioteca, el laboratorio o el parque para el desarrollo de mis "
                "clases."
            ),
            estudiantes=(
                "Los profesores me llevan a otros sitios fuera del salón o del colegio "
                "para hacer las clases (por ejemplo, la biblioteca, el laboratorio, el "
                "parque, el museo, el río, etc.)."
            ),
            acudientes=(
                "A los estudiantes los llevan a lugares diferentes al salón para hacer "
                "sus clases (por ejemplo, la biblioteca, el laboratorio, el parque, el "
                "museo, el río, etc.)."
            ),
        ),
        Statement(
            display_text=(
                "Los docentes logran cumplir los objetivos y el desarrollo de las "
                "clases que tenían planeados."
            ),
            docentes=(
                "Logro cumplir los objetivos y el desarrollo que planeo para mis clases."
            ),
            estudiantes="Mis profesores logran hacer sus clases de manera fluida.",
            acudientes=NOT_APPLICABLE,
        ),
        Statement(
            display_text=(
                "Los docentes demuestran que confían en los estudiantes y que creen en "
                "sus capacidades y habilidades."
            ),
            docentes=(
                "Demuestro a mis estudiantes que confío en ellos y que creo en sus "
                "capacidades y habilidades."
            ),
            estudiantes=(
                "Mis profesores me demuestran que confían en mí y creen en mis "
                "habilidades y capacidades."
            ),
            acudientes=(
                "Los profesores demuestran que confían en los estudiantes y que creen "
                "en sus capacidades y habilidades."
            ),
        ),
        Statement(
            display_text=(
                "Los docentes adaptan su enseñanza para que todas y todos aprendan "
                "independiente de su entorno social, afectivo y sus capacidades "
                "físicas/cognitivas."
            ),
            docentes=(
                "Desarrollo mis clases con enfoque diferencial para garantizar el "
                "derecho a la educación de todas y todos mis estudiantes, independiente "
                "de su entorno social, afectivo y sus capacidades físicas y cognitivas."
            ),
            estudiantes=(
                "Mis profesores hacen las clases de manera que nos permiten aprender a "
                "todas y todos sin importar nuestras diferencias (discapacidad, "
                "situaciones familiares o sociales)."
            ),
            acudientes=(
                "Los profesores del colegio hacen las clases garantizando el derecho a "
                "la educación de los estudiantes que viven condiciones o situaciones "
                "especiales (por ejemplo, alguna discapacidad, que sean desplazados o "
                "que entraron tarde al curso)."
            ),
        ),
        Statement(
            display_text=(
                "Al evaluar, los docentes tienen en cuenta las emociones, en conjunto "
                "con el aprendizaje y el comportamiento."
            ),
            docentes=(
                "Cuando evalúo a mis estudiantes tengo en cuenta su dimensión afectiva "
                "y emocional, además de la cognitivas y comportamental."
            ),
            estudiantes=(
                "Cuando mis profesores me evalúan tienen en cuenta mis emociones, "
                "además de mis aprendizajes y comportamiento."
            ),
            acudientes=(
                "Cuando los profesores evalúan a los estudiantes tienen en cuenta su "
                "dimensión afectiva y emocional, además de la cognitiva y la "
                "comportamental."
            ),
        ),
        Statement(
            display_text=(
                "La Institución Educativa organiza o participa en actividades "
                "deportivas, culturales o académicas con otros colegios."
            ),
            docentes=(
                "Los profesores organizamos con otros colegios o instituciones "
                "actividades deportivas, académicas y culturales."
            ),
            estudiantes=(
                "Participamos en campeonatos deportivos, ferias y olimpiadas con otros "
                "colegios o instituciones."
            ),
            acudientes=(
                "El colegio organiza o participa en actividades como torneos, "
                "campeonatos, olimpiadas o ferias con otros colegios o instituciones."
            ),
        ),
    ),
)

CONVIVENCIA = Category(
    key="convivencia",
    title="CONVIVENCIA",
    label="Convivencia",
    color="#923131",
    starts_new_page=True,
    statements=(
        Statement(
            display_text=(
                "Todos los estudiantes son tratados con respeto independiente de sus "
                "creencias religiosas, género, orientación sexual, etnia y capacidades "
                "o talentos."
            ),
            docentes=(
                "En el colegio mis estudiantes son tratados con respeto, independiente "
                "de sus creencias religiosas, género, orientación sexual, grupo étnico "
                "y capacidades o talentos de los demás."
            ),
            estudiantes=(
                "En el colegio mis compañeros y yo somos tratados con respeto sin "
                "importar nuestras creencias religiosas, género, orientación sexual, "
                "grupo étnico y capacidades o talentos."
            ),
            acudientes=(
                "En el colegio los estudiantes son respetuosos y solidarios entre "
                "ellos, comprendiendo y aceptando las creencias religiosas, el género, "
                "la orientación sexual, el grupo étnico y las capacidades o talentos "
                "de los demás."
            ),
        ),
        Statement(
            display_text=(
                "Docentes y estudiantes establecen acuerdos de convivencia al comenzar "
                "el año escolar."
            ),
            docentes=(
                "Establezco con mis estudiantes acuerdos de convivencia al comenzar el "
                "año escolar."
            ),
            estudiantes=(
                "Mis profesores establecen conmigo y mis compañeros acuerdos de "
                "convivencia al comienzo del año."
            ),
            acudientes=(
                "Los profesores establecen acuerdos de convivencia con los estudiantes "
                "al comenzar el año escolar."
            ),
        ),
        Statement(
            display_text=(
                "Las opiniones y propuestas de familias, estudiantes y docentes son "
                "tenidas en cuenta cuando se construyen los acuerdos de convivencia en "
                "el colegio."
            ),
            docentes=(
                "Mis opiniones, propuestas y sugerencias se tienen en cuenta cuando se "
                "construyen acuerdos de convivencia en el colegio."
            ),
            estudiantes=(
                "Mis opiniones, propuestas y sugerencias se tienen en cuenta cuando se "
                "construyen acuerdos de convivencia en el colegio."
            ),
            acudientes=(
                "Mis opiniones, propuestas y sugerencias se tienen en cuenta cuando se "
                "construyen acuerdos de convivencia en el colegio."
            ),
        ),
        Statement(
            display_text="Los docentes son tratados con respeto por los estudiantes.",
            docentes=(
                "Los estudiantes me tratan con respeto a mí y a mis otros compañeros "
                "docentes, directivos y administrativos."
            ),
            estudiantes=(
                "Mis compañeros y yo tratamos con respeto a los profesores, directivos "
                "y administrativos del colegio."
            ),
            acudientes=(
                "Los estudiantes tratan con respeto a los profesores, directivos y "
                "administrativos del colegio."
            ),
        ),
        Statement(
            display_text=(
                "Cada miembro de la comunidad educativa se siente escuchado y "
                "comprendido por los demás."
            ),
            docentes=(
                "En el colegio me siento escuchado/a y comprendido/a por otros "
                "docentes, los directivos, los estudiantes y los acudientes."
            ),
            estudiantes=(
                "En el colegio me siento escuchado/a y comprendido/a por los "
                "profesores, los directivos, los estudiantes y otros acudientes."
            ),
            acudientes=NOT_APPLICABLE,
        ),
        Statement(
            display_text=(
                "En la Institución Educativa, las personas se sienten apoyadas para "
                "resolver los conflictos que se dan y se generan aprendizajes a partir "
                "de estos."
            ),
            docentes=(
                "En el colegio recibo apoyo para resolver los conflictos que surgen y "
                "generar aprendizajes a partir de estos."
            ),
            estudiantes=(
                "En el colegio recibo apoyo para resolver los conflictos que se dan y "
                "generar aprendizajes a partir de estos."
            ),
            acudientes=(
                "En el colegio recibo apoyo para resolver los conflictos que se dan y "
                "generar aprendizajes a partir de estos."
            ),
        ),
    ),
)

CATALOG: Tuple[Category, ...] = (COMUNICACION, PRACTICAS_PEDAGOGICAS, CONVIVENCIA)

_BY_KEY: Dict[str, Category] = {category.key: category for category in CATALOG}


def get_category(key: str) -> Category:
    """Return the catalog category with *key*.

    Raises
    ------
    KeyError
        If no category has that key.
    """
    return _BY_KEY[key]
