"""
PDF 模块业务逻辑
生成固定版式的网络安全政策遵守声明书
"""

import os
import logging
from typing import NamedTuple, Optional

import fitz  # PyMuPDF

from core.config import get_settings

logger = logging.getLogger(__name__)

# A4 页面（pt）
PAGE_WIDTH = 595
PAGE_HEIGHT = 842
RIGHT_MARGIN = 50

CREST_SIZE = 100
CREST_TOP = 20

TITLE_FONT = "hebo"  # Helvetica-Bold
BODY_FONT = "tiro"   # Times-Roman

PDF_FILENAME = "akuan_pematuhan_epks.pdf"


class TextBlock(NamedTuple):
    text: str
    x: float
    y: float  # 文本顶边
    fontsize: float
    fontname: str


DECLARATION_BLOCKS = [
    TextBlock("SURAT AKUAN PEMATUHAN", 150, 150, 16, TITLE_FONT),
    TextBlock("POLISI KESELAMATAN SIBER KEMENTERIAN PERTAHANAN", 50, 180, 16, TITLE_FONT),
    TextBlock("UAT 15.09.2022", 250, 230, 14, BODY_FONT),
    TextBlock("Nama : NUR SYAHADAH BINTI MOHD SALLEH", 50, 270, 14, BODY_FONT),
    TextBlock("No KP / Tentera : 860806295128", 50, 300, 14, BODY_FONT),
    TextBlock("Jawatan / Pangkat : Pegawai Teknologi Maklumat, Gred F41/F44", 50, 330, 14, BODY_FONT),
    TextBlock("Jabatan/ Bahagian/ Perkhidmatan ATM / Syarikat:", 50, 360, 14, BODY_FONT),
    TextBlock("BAHAGIAN PENGURUSAN MAKLUMAT", 50, 390, 14, BODY_FONT),
    TextBlock("Adalah dengan sesungguhnya dan sebenarnya mengaku bahawa:", 50, 430, 14, BODY_FONT),
    TextBlock(
        "1. Saya telah membaca, memahami dan akur akan peruntukan-peruntukan yang terkandung "
        "di dalam Polisi Keselamatan Siber Kementerian Pertahanan Malaysia (PKS MINDEF)",
        70, 470, 14, BODY_FONT
    ),
    TextBlock(
        "2. Sekiranya saya ingkar kepada peruntukan-peruntukan yang ditetapkan, maka tindakan "
        "undang-undang boleh diambil ke atas diri saya.",
        70, 540, 14, BODY_FONT
    ),
    TextBlock("Tarikh : 21 Sep 2022", 50, 610, 14, BODY_FONT),
]


class PdfService:
    """PDF 服务类"""

    @staticmethod
    def _insert_crest(page: "fitz.Page", image_path: Optional[str]) -> bool:
        """在页面顶部居中插入徽章图片，文件不存在时跳过"""
        if not image_path or not os.path.isfile(image_path):
            return False
        left = (PAGE_WIDTH - CREST_SIZE) / 2
        page.insert_image(
            fitz.Rect(left, CREST_TOP, left + CREST_SIZE, CREST_TOP + CREST_SIZE),
            filename=image_path
        )
        return True

    @staticmethod
    def _insert_block(page: "fitz.Page", block: TextBlock) -> None:
        """在绝对坐标处写入文本，超出右边距自动换行"""
        rect = fitz.Rect(block.x, block.y, PAGE_WIDTH - RIGHT_MARGIN, PAGE_HEIGHT - RIGHT_MARGIN)
        remaining = page.insert_textbox(
            rect,
            block.text,
            fontsize=block.fontsize,
            fontname=block.fontname,
            color=(0, 0, 0)
        )
        if remaining < 0:
            logger.warning(f"文本超出页面范围: {block.text[:30]}...")

    @staticmethod
    def build_declaration_pdf(crest_image: Optional[str] = None) -> bytes:
        """生成遵守声明书 PDF，返回文件字节"""
        if crest_image is None:
            crest_image = get_settings().pdf_crest_image

        doc = fitz.open()
        try:
            page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            PdfService._insert_crest(page, crest_image)
            for block in DECLARATION_BLOCKS:
                PdfService._insert_block(page, block)
            return doc.tobytes()
        finally:
            doc.close()
