from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


BASE_DIR = Path(__file__).resolve().parent.parent


class Config(BaseSettings):
    env: Literal["dev", "prod"] = "dev"
    """当前环境，dev 开发环境，prod 生产环境"""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "DEBUG" if env == "dev" else "INFO"
    """日志等级"""

    # FastAPI 配置
    title: str = "TraitCompass API"
    """API 服务标题"""
    version: str = "0.1.0"
    """API 服务版本"""
    host: str = "127.0.0.1"
    """API 本地回环地址(IP地址)"""
    port: int = 8080
    """API 服务端口"""

    # CORS 配置
    cors_allow_origins: list[str] = ["*"] if env == "dev" else []
    """允许跨域的源列表，开发环境下允许所有来源"""
    cors_allow_methods: list[str] = ["*"]
    """允许的 HTTP 方法"""
    cors_allow_headers: list[str] = ["*"]
    """允许的 HTTP 头"""
    cors_allow_credentials: bool = True
    """是否允许携带凭证（如 Cookies）"""

    # 静态题库与报告数据
    data_dir: Path = BASE_DIR.parent / "data"
    """静态 JSON 数据目录，包含 questionnaire.json、report.json 与各专业详情 {code}.json"""

    # 持久化配置
    storage_backend: Literal["memory", "sqlite", "file"] = "sqlite"
    """答题状态的存储后端：memory 仅驻留内存，sqlite 使用数据库，file 使用单个 JSON 文件"""
    db_url: str = "sqlite:///./storage.db"
    """orm 数据库连接字符串（storage_backend 为 sqlite 时生效）"""
    storage_file: Path = BASE_DIR.parent / "storage.json"
    """JSON 文件存储路径（storage_backend 为 file 时生效）"""

    # 测评规则
    dimension_order: list[str] = ["看", "听", "说", "记", "想", "做", "运动"]
    """维度的固定顺序，决定题目排序与维度解锁顺序"""
    milestone_block_size: int = 24
    """每个维度的题目数量，累计作答数每达到该值的整数倍触发一次维度解锁"""
    matched_major_step: int = 20
    """每作答多少题，"已匹配专业" 计数加一（仅用于展示）"""
    quick_quiz_size: int = 8
    """热门专业快速测评随机抽取的题目数量"""
    option_value_min: float = -2.0
    """选项分值的理论下限"""
    option_value_max: float = 2.0
    """选项分值的理论上限"""


config = Config()
