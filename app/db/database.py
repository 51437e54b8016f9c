import sqlalchemy
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from app.core.config import settings  # ★ configから設定を読み込む
from app.core.errors import Internal

# Cloud SQL Connector は必要になった時点で初期化する
_connector = None


def getconnection():
    """
    Cloud SQL への接続を確立する関数.
    config.py (settings) の値を使用します。
    """
    global _connector
    if _connector is None:
        from google.cloud.sql.connector import Connector

        _connector = Connector()

    # settings.DB_HOST には INSTANCE_CONNECTION_NAME が入っています
    conn = _connector.connect(
        settings.DB_HOST,
        "pymysql",
        user=settings.DB_USER,
        password=settings.DB_PASSWORD,
        db=settings.DB_NAME,
        charset="utf8mb4",
    )
    return conn


def create_db_engine(url: str = ""):
    """
    DATABASE_URL があればそれを使い、なければ Cloud SQL (MySQL) に接続するエンジンを作る。
    SQLite のインメモリDBはスレッド間で1本の接続を共有させる。
    """
    if url:
        if url.startswith("sqlite"):
            return sqlalchemy.create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return sqlalchemy.create_engine(url, pool_pre_ping=True)

    return sqlalchemy.create_engine(
        "mysql+pymysql://",
        creator=getconnection,
    )


# エンジンの作成
# ローカル実行時など、接続情報がない場合にクラッシュしないよう保護
try:
    engine = create_db_engine(settings.DATABASE_URL)
except Exception as e:
    print(f"Warning: Could not create database engine. {e}")
    engine = None

# セッション作成
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """
    DBセッションを取得するための依存関係.
    """
    if engine is None:
        raise Internal("Database engine is not initialized.")

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
