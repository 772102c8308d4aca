# seed_data.py
# Демонстрационные данные: треки хакатона, судьи, критерии и пара оценок

from app import create_app
from extensions import get_evaluation_store
from errors import JudgingError

DEMO_PROJECTS = [
    {
        'name': 'DeFi Lending Platform', 'team_name': 'Alpha Team', 'track': 'Onchain Finance & RWA',
        'description': 'Decentralized lending platform for African markets', 'contact_email': 'alpha@example.com',
    },
    {
        'name': 'Supply Chain Tracker', 'team_name': 'Beta Builders', 'track': 'DLT Operations & ESG',
        'description': 'Track and verify supply chain using Hedera', 'contact_email': 'beta@example.com',
    },
    {
        'name': 'AI-Powered Healthcare', 'team_name': 'Gamma Health', 'track': 'AI & DePIN',
        'description': 'AI diagnosis system on blockchain', 'contact_email': 'gamma@example.com', 'trl': 'Prototype',
    },
    {
        'name': 'MetaAfrica Game', 'team_name': 'Delta Gaming', 'track': 'Gaming & Metaverse',
        'description': 'Metaverse platform showcasing African culture', 'contact_email': 'delta@example.com',
    },
]

DEMO_JUDGES = [
    {
        'name': 'Dr. Sarah Johnson', 'email': 'sarah.johnson@hedera.com', 'role': 'Lead Judge',
        'tracks': ['Onchain Finance & RWA', 'DLT Operations & ESG'], 'expertise': ['Blockchain', 'Finance', 'DeFi'],
    },
    {
        'name': 'Michael Chen', 'email': 'michael.chen@hedera.com', 'role': 'Technical Judge',
        'tracks': ['AI & DePIN', 'Gaming & Metaverse', 'Onchain Finance & RWA'],
        'expertise': ['Smart Contracts', 'Security', 'Scalability'],
    },
    {
        'name': 'Amina Diallo', 'email': 'amina.diallo@hedera.com',
        'tracks': ['DLT Operations & ESG'], 'expertise': ['Impact', 'Sustainability', 'ESG'],
    },
]

DEMO_CRITERIA = [
    {'name': 'Innovation', 'weight': 1},
    {'name': 'Technical Execution', 'weight': 1.5},
    {'name': 'Impact', 'weight': 1},
    {'name': 'Presentation', 'weight': 0.5},
    {'name': 'Hedera Integration', 'weight': 1},
]


def seed_demo_data(store):
    """Очищает хранилище и заполняет его демонстрационными данными."""
    store.reset()

    projects = store.projects.create_many(DEMO_PROJECTS)
    judges = [store.judges.create(**judge) for judge in DEMO_JUDGES]
    criteria = [store.criteria.create(**criterion) for criterion in DEMO_CRITERIA]

    # Пример оценок: первый судья оценивает первый проект по всем критериям
    ratings = dict(zip([c.id for c in criteria], [8, 7, 9, 6, 8]))
    store.scores.submit_many(projects[0].id, judges[0].id, ratings)
    store.scores.upsert(projects[0].id, judges[1].id, criteria[0].id, 9)

    return {'projects': projects, 'judges': judges, 'criteria': criteria}


if __name__ == '__main__':
    # Создаем экземпляр приложения, чтобы получить контекст
    app = create_app()

    with app.app_context():
        print("Добавление тестовых данных...")
        try:
            seeded = seed_demo_data(get_evaluation_store())
            print(
                f"Тестовые данные успешно добавлены: {len(seeded['projects'])} проектов, "
                f"{len(seeded['judges'])} судей, {len(seeded['criteria'])} критериев."
            )
        except JudgingError as e:
            print(f"Произошла ошибка при добавлении данных: {e}")
