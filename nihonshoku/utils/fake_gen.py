from faker import Faker
from faker.providers import BaseProvider


class NihonshokuProvider(BaseProvider):
    """
    演示数据生成器
    英国的日本料理店名、伦敦附近的坐标、TipTap 文档
    """

    # 按菜系区分的店名前缀
    name_prefixes = {
        'washoku': ['和食処', '割烹', '料亭', 'Kappo'],
        'sushi': ['鮨', 'Sushi', '寿司処'],
        'ramen': ['麺屋', 'Ramen', 'らーめん'],
        'izakaya': ['居酒屋', 'Izakaya', '酒場'],
        'other': ['Kissa', 'カフェ', 'Onigiri'],
    }

    name_words = [
        '桜', '月', '波', '雪', '竹', '松', '凛', '灯', '縁', '匠',
        'Sakura', 'Tsuki', 'Nami', 'Yuki', 'Take', 'Matsu', 'Akari', 'Takumi',
    ]

    # 伦敦中心区域
    center_latitude = 51.5072
    center_longitude = -0.1276

    def restaurant_name(self, cuisine_type='washoku'):
        prefix = self.random_element(self.name_prefixes.get(cuisine_type, self.name_prefixes['other']))
        return f"{prefix} {self.random_element(self.name_words)}"

    def london_coordinates(self):
        """返回 (纬度, 经度) 文本，偏移不超过约 10km"""
        lat = self.center_latitude + self.generator.random.uniform(-0.09, 0.09)
        lng = self.center_longitude + self.generator.random.uniform(-0.15, 0.15)
        return f"{lat:.6f}", f"{lng:.6f}"

    def tiptap_document(self, paragraphs=3, heading=None):
        """生成 TipTap 编辑器格式的 JSON 文档"""
        content = []
        if heading:
            content.append({
                'type': 'heading',
                'attrs': {'level': 2},
                'content': [{'type': 'text', 'text': heading}],
            })
        for _ in range(paragraphs):
            content.append({
                'type': 'paragraph',
                'content': [{'type': 'text', 'text': self.generator.paragraph(nb_sentences=4)}],
            })
        return {'type': 'doc', 'content': content}


# 初始化 Faker 并添加自定义 Provider
fake = Faker('ja_JP')
fake.add_provider(NihonshokuProvider)

# 地址、电话、网址使用英国格式
fake_uk = Faker('en_GB')
