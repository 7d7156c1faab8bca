"""Default catalog written on first boot."""

from venue.domain.normalizers import DEFAULT_MEDIA

DEFAULT_EVENTS = [
    {
        "id": "vino-notas-ene",
        "type": "Cata de vino",
        "monthKey": "ENERO",
        "title": "Cata: Notas & Maridajes",
        "desc": (
            "Explorá aromas y sabores con maridajes guiados. "
            "Ideal para principiantes y curiosos."
        ),
        "img": "./assets/img/hero-1.jpg",
        "location": "San José (por confirmar)",
        "timeRange": "Por confirmar",
        "durationHours": "Por confirmar",
        "duration": "1.5–2.5 horas",
        "dates": [{"label": "18-19 enero", "seats": 12}],
    },
    {
        "id": "coctel-feb",
        "type": "Coctelería",
        "monthKey": "FEBRERO",
        "title": "Cocteles Clásicos con Twist",
        "desc": (
            "Aprendé técnica, balance y presentación con recetas "
            "clásicas reinterpretadas."
        ),
        "img": "./assets/img/hero-2.jpg",
        "location": "San José (por confirmar)",
        "timeRange": "Por confirmar",
        "durationHours": "Por confirmar",
        "duration": "2 horas",
        "dates": [{"label": "09 febrero", "seats": 0}],
    },
    {
        "id": "vino-marzo",
        "type": "Cata de vino",
        "monthKey": "MARZO",
        "title": "Ruta de Tintos",
        "desc": "Comparación de perfiles, cuerpo, taninos y maridajes para cada estilo.",
        "img": "./assets/img/hero-3.jpg",
        "location": "Heredia (por confirmar)",
        "timeRange": "Por confirmar",
        "durationHours": "Por confirmar",
        "duration": "2–2.5 horas",
        "dates": [
            {"label": "15 marzo", "seats": 8},
            {"label": "22 marzo", "seats": 8},
        ],
    },
]

DEFAULT_MEDIA_RECORD = DEFAULT_MEDIA.to_record()

DEFAULT_PROMOS = [
    {
        "id": "club-vino-banner",
        "active": True,
        "kind": "BANNER",
        "target": "home",
        "priority": 10,
        "badge": "NUEVO",
        "title": "El Club del Vino viene pronto",
        "desc": "Acceso anticipado, experiencias privadas y maridajes exclusivos.",
        "ctaLabel": "Unirme a la lista VIP",
        "ctaHref": (
            "https://wa.me/5068845123?text=Hola%20quiero%20unirme%20a%20la%20lista"
            "%20VIP%20del%20Club%20del%20Vino%20%F0%9F%8D%B7"
        ),
        "mediaImg": "",
        "note": "",
        "startAt": "",
        "endAt": "",
        "dismissDays": 3,
    },
    {
        "id": "club-vino-modal",
        "active": True,
        "kind": "MODAL",
        "target": "home",
        "priority": 9,
        "badge": "NUEVO",
        "title": "🍷 Club del Vino (próximamente)",
        "desc": (
            "Una comunidad para probar, aprender y compartir. "
            "Cupos limitados en el lanzamiento."
        ),
        "note": "Tip: si te unís ahora, te avisamos primero cuando esté la página lista.",
        "ctaLabel": "Quiero estar adentro",
        "ctaHref": (
            "https://wa.me/5068845123?text=Hola%20quiero%20estar%20en%20el%20Club"
            "%20del%20Vino%20%F0%9F%8D%B7"
        ),
        "mediaImg": "./assets/img/hero-1.jpg",
        "startAt": "",
        "endAt": "",
        "dismissDays": 7,
    },
]
