"""联系表单测试数据生成器 - 基于 Faker 构建"""
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from faker import Faker

from utils.logger import logger


@dataclass(frozen=True)
class ContactFormData:
    """联系表单三个输入框的值"""
    name: str
    email: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class ContactDataGenerator:
    """生成合法/非法的联系表单数据"""

    def __init__(self, locale: str = "en_US", seed: Optional[int] = None):
        self.faker: Faker = Faker(locale)
        if seed is not None:
            self.faker.seed_instance(seed)
        logger.debug(f"ContactDataGenerator initialized (locale={locale}, seed={seed})")

    def generate_name(self) -> str:
        return self.faker.name()

    def generate_email(self, domain: Optional[str] = None) -> str:
        """生成邮箱地址；指定 domain 时使用该域名"""
        if domain:
            return f"{self.faker.user_name()}@{domain}"
        return self.faker.email()

    def generate_invalid_email(self) -> str:
        """生成缺少 @ 的邮箱，浏览器 type=email 校验会判定为 typeMismatch"""
        return self.faker.user_name().replace("@", "") + "-invalid"

    def generate_message(self, max_nb_chars: int = 200) -> str:
        return self.faker.text(max_nb_chars=max_nb_chars).replace("\n", " ")

    def valid_contact(self) -> ContactFormData:
        return ContactFormData(
            name=self.generate_name(),
            email=self.generate_email(),
            message=self.generate_message(),
        )

    def invalid_email_contact(self) -> ContactFormData:
        return ContactFormData(
            name=self.generate_name(),
            email=self.generate_invalid_email(),
            message=self.generate_message(),
        )
