class CatalogUnavailableError(Exception):
    """题库或报告数据缺失、无法解析时抛出，调用方应提示用户重试。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"数据暂不可用: {name}")
        self.name = name


class UnknownQuestionError(Exception):
    """作答的题目不在题库中。"""

    def __init__(self, question_id: int) -> None:
        super().__init__(f"题目不存在: {question_id}")
        self.question_id = question_id
