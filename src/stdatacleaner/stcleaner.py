import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from tqdm import tqdm

from stvalidator import STValidator, ValidatorConfig, auto_repair

logger = logging.getLogger(__name__)

QUALITY_BUCKETS = ("golden", "warning", "syntax_error", "empty")


class STDataCleaner:
    """
    批量清洗 {instruction, output} 格式的 ST 数据集。
    每条样本先 auto_repair，再用 STValidator 打标，按质量分桶写出。
    """

    def __init__(self, input_dir: str, output_dir: str, strict: bool = False, ext: str = ".json",
                 config: Optional[ValidatorConfig] = None):
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.ext = ext
        self.strict_mode = strict
        self.validator = STValidator(config)

        self.stats = {
            "total_files": 0,
            "processed_files": 0,
            "total_samples": 0,
            "golden": 0,        # 无错误无警告
            "warning": 0,       # 只有警告
            "syntax_error": 0,  # 有错误 (DPO 负样本)
            "empty": 0,         # 提取不到代码
        }

    def label_sample(self, item: Dict) -> str:
        """给单条样本打标，写入 st_metadata，返回质量等级"""
        original_code = item.get("output", "") or ""
        repaired_code = auto_repair(original_code)
        if repaired_code != original_code:
            item["output"] = repaired_code
            item["was_repaired"] = True

        if not repaired_code:
            item["st_metadata"] = {"quality": "empty", "error": "No code found after repair"}
            return "empty"

        report = self.validator.validate(repaired_code)
        if report.errors:
            status = "syntax_error"
        elif report.warnings:
            status = "warning"
        else:
            status = "golden"

        item["st_metadata"] = {
            "quality": status,
            "error": report.errors[0].message if report.errors else None,
            "error_count": len(report.errors),
            "warning_count": len(report.warnings),
            "scores": {
                "syntax": report.syntax_score,
                "logic": report.logic_score,
                "safety": report.safety_score,
            },
        }
        return status

    def process_single_file(self, file_path: Path) -> Dict[str, List[Dict]]:
        """处理单个 JSON 文件，按质量分类返回数据字典"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"⚠️ Skipping unreadable file {file_path.name}: {e}")
            return {}

        if not isinstance(data, list):
            logger.warning(f"⚠️ Skipping {file_path.name}: top-level JSON is not an array")
            return {}

        categorized_data: Dict[str, List[Dict]] = {bucket: [] for bucket in QUALITY_BUCKETS}
        for item in data:
            if not isinstance(item, dict):
                continue
            self.stats["total_samples"] += 1
            status = self.label_sample(item)
            categorized_data[status].append(item)
            self.stats[status] += 1

        return categorized_data

    def run(self) -> Dict[str, int]:
        """执行批量清洗流程"""
        files = sorted(self.input_dir.rglob(f"*{self.ext}"))
        self.stats["total_files"] = len(files)

        if not files:
            logger.error(f"❌ No {self.ext} files found in {self.input_dir}")
            return self.stats

        logger.info(f"🚀 Found {len(files)} files, start labelling...")

        for file_path in tqdm(files, desc="Validating Files"):
            categorized_data = self.process_single_file(file_path)
            if not categorized_data:
                continue

            self.stats["processed_files"] += 1

            # 每个输入文件对应一个同名文件夹
            file_out_dir = self.output_dir / file_path.stem
            file_out_dir.mkdir(parents=True, exist_ok=True)

            for status, items in categorized_data.items():
                if not items or (self.strict_mode and status != "golden"):
                    continue
                out_file = file_out_dir / f"{status}.json"
                with open(out_file, 'w', encoding='utf-8') as f:
                    json.dump(items, f, ensure_ascii=False, indent=2)

        self.log_report()
        return self.stats

    def log_report(self):
        total = self.stats["total_samples"]
        logger.info("=" * 55)
        logger.info("📊 ST dataset validation report")
        logger.info(f"📂 Files: {self.stats['total_files']} (processed: {self.stats['processed_files']})")
        logger.info(f"📦 Samples: {total}")
        if total > 0:
            for bucket in QUALITY_BUCKETS:
                count = self.stats[bucket]
                logger.info(f"   {bucket:<13s}{count:6d} ({count / total * 100:.2f}%)")
        logger.info(f"📁 Output: {self.output_dir.absolute()}")
        logger.info("=" * 55)
