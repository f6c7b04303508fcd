"""
Test Configuration for an in-memory WordPress database

Provides an SQLite engine (with working SAVEPOINTs), session factories, and
a small seeded WordPress data set for testing the sanitizer without a
MySQL server.
"""

from sqlalchemy import create_engine, event, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sanitize_db import Base, User, UserMeta, Comment, PostMeta, Option


TEST_CONNECTION = 'sqlite://'

STAFF_DOMAIN = 'staff.example-agency.com'

ACTIVE_PLUGINS_WOOCOMMERCE = 'a:1:{i:0;s:27:"woocommerce/woocommerce.php";}'
ACTIVE_PLUGINS_BOTH = (
    'a:2:{i:0;s:29:"gravityforms/gravityforms.php";i:1;s:27:"woocommerce/woocommerce.php";}'
)


def create_test_engine(echo=False):
    """
    Create SQLAlchemy engine for an in-memory test database.

    pysqlite's own transaction handling breaks SAVEPOINT; take over BEGIN
    ourselves so per-record savepoints behave as they do on MySQL.

    Args:
        echo: If True, log all SQL statements (useful for debugging)

    Returns:
        SQLAlchemy Engine instance with the WordPress schema created
    """
    engine = create_engine(
        TEST_CONNECTION,
        echo=echo,
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, 'connect')
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, 'begin')
    def do_begin(conn):
        conn.exec_driver_sql('BEGIN')

    Base.metadata.create_all(engine)
    return engine


def create_test_session_factory(engine=None):
    """
    Create a session factory for tests, configured like the CLI's.

    Args:
        engine: Optional engine to use. If None, creates a new one.

    Returns:
        sessionmaker instance
    """
    if engine is None:
        engine = create_test_engine()

    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_plugin_table(session, name):
    """Create an opaque plugin table with a few rows."""
    session.connection().exec_driver_sql(
        f'CREATE TABLE "{name}" (id INTEGER PRIMARY KEY, value TEXT)'
    )
    for i in range(3):
        session.connection().exec_driver_sql(
            f'INSERT INTO "{name}" (value) VALUES (?)', (f'secret entry {i}',)
        )
    session.commit()


def seed_wordpress(session, active_plugins=None):
    """
    Populate the standard test data set.

    - 3 users: alice, bob, and staff (at STAFF_DOMAIN)
    - profile attributes for each, IM handles for alice and staff
    - 3 comments: held, held pingback, approved
    - a transient and its timeout, a site option
    - order attributes in wp_postmeta

    Returns:
        dict of the created primary keys
    """
    alice = User(user_login='alice', user_pass='$P$Bhash-alice', user_nicename='alice',
                 user_email='alice@realmail.com', user_url='https://alice.blog',
                 display_name='Alice Archer')
    bob = User(user_login='bob', user_pass='$P$Bhash-bob', user_nicename='bob',
               user_email='bob@realmail.com', user_url='', display_name='Bob Baker')
    staff = User(user_login='staffer', user_pass='$P$Bhash-staff', user_nicename='staffer',
                 user_email=f'ops@{STAFF_DOMAIN}', user_url='https://agency.example',
                 display_name='Site Operator')
    session.add_all([alice, bob, staff])
    session.flush()

    for user, first, last in [(alice, 'Alice', 'Archer'), (bob, 'Bob', 'Baker'),
                              (staff, 'Site', 'Operator')]:
        session.add_all([
            UserMeta(user_id=user.ID, meta_key='first_name', meta_value=first),
            UserMeta(user_id=user.ID, meta_key='last_name', meta_value=last),
            UserMeta(user_id=user.ID, meta_key='nickname', meta_value=user.user_login),
            UserMeta(user_id=user.ID, meta_key='description', meta_value=f'About {first} {last}'),
            UserMeta(user_id=user.ID, meta_key='wp_capabilities', meta_value='a:1:{s:10:"subscriber";b:1;}'),
        ])
    session.add_all([
        UserMeta(user_id=alice.ID, meta_key='aim', meta_value='alice_aim'),
        UserMeta(user_id=alice.ID, meta_key='_jabber', meta_value='alice@jabber.org'),
        UserMeta(user_id=staff.ID, meta_key='yim', meta_value='staff_yim'),
        UserMeta(user_id=alice.ID, meta_key='billing_city', meta_value='Springfield'),
        UserMeta(user_id=bob.ID, meta_key='billing_city', meta_value=''),
        UserMeta(user_id=bob.ID, meta_key='_billing_phone', meta_value='555-0100'),
    ])

    held = Comment(comment_post_ID=1, comment_author='Carol Commenter',
                   comment_author_email='carol@realmail.com', comment_author_url='https://carol.net',
                   comment_author_IP='203.0.113.9', comment_content='Please call me at 555-0199',
                   comment_approved=Comment.HOLD, comment_type='comment')
    pingback = Comment(comment_post_ID=1, comment_author='Some Blog',
                       comment_author_email='', comment_author_url='https://someblog.example/post',
                       comment_author_IP='198.51.100.7', comment_content='[...] linked here [...]',
                       comment_approved=Comment.HOLD, comment_type='pingback')
    public = Comment(comment_post_ID=1, comment_author='Dave Public',
                     comment_author_email='dave@realmail.com', comment_author_url='',
                     comment_author_IP='192.0.2.1', comment_content='Great post!',
                     comment_approved=Comment.APPROVED, comment_type='comment')
    session.add_all([held, pingback, public])

    session.add_all([
        Option(option_name='siteurl', option_value='https://shop.example'),
        Option(option_name='_transient_feed_abc', option_value='cached feed'),
        Option(option_name='_transient_timeout_feed_abc', option_value='1700000000'),
        Option(option_name='_site_transient_update_core', option_value='cached'),
        # '_' is a LIKE wildcard: must survive a '_transient_' prefix purge
        Option(option_name='xtransientx', option_value='keep me'),
    ])
    if active_plugins is not None:
        session.add(Option(option_name='active_plugins', option_value=active_plugins))

    session.add_all([
        PostMeta(post_id=10, meta_key='_billing_email', meta_value='orderer@realmail.com'),
        PostMeta(post_id=10, meta_key='_billing_first_name', meta_value='Olive'),
        PostMeta(post_id=10, meta_key='_cc_last_4', meta_value='4242'),
        PostMeta(post_id=10, meta_key='_order_total', meta_value='19.99'),
        PostMeta(post_id=11, meta_key='_billing_email', meta_value=''),
    ])
    session.commit()

    return {
        'alice': alice.ID,
        'bob': bob.ID,
        'staff': staff.ID,
        'held': held.comment_ID,
        'pingback': pingback.comment_ID,
        'public': public.comment_ID,
    }


def table_rows(session, model):
    """Current rows of a table as plain tuples, read straight from the database."""
    table = model.__table__
    return [tuple(row) for row in session.execute(select(table).order_by(*table.primary_key.columns))]


def snapshot(session):
    """Every row of every WordPress table, for before/after comparison."""
    return {model.__tablename__: table_rows(session, model)
            for model in (User, UserMeta, Comment, PostMeta, Option)}


def user_row(session, user_id):
    return dict(session.execute(select(User.__table__).where(User.ID == user_id)).mappings().one())


def comment_row(session, comment_id):
    return dict(session.execute(
        select(Comment.__table__).where(Comment.comment_ID == comment_id)
    ).mappings().one())


def meta_values(session, model, key):
    """All stored values for a key (either variant)."""
    return [row[0] for row in session.execute(
        select(model.meta_value).where(model.meta_key.in_([key, f'_{key}']))
    )]
