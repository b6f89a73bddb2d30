from utils.selector_helper import Selector

# ===== 导航栏 =====
nav_brand = Selector.by_id("navbar-brand", "导航栏品牌（返回首页）")
nav_home = Selector.by_id("link-home", "导航栏-首页")
nav_repositories = Selector.by_id("link-repositories", "导航栏-仓库")
nav_testimonials = Selector.by_id("link-testimonials", "导航栏-推荐")
theme_toggle = Selector.by_id("toggle-theme-btn", "深色/浅色主题切换按钮")
language_select = Selector.by_id("language-select", "语言下拉框")

# ===== 简历 / 求职信 =====
cover_letter_button = Selector.by_id("btn-cover-letter-en", "英文求职信")
resume_button = Selector.by_id("btn-resume-en", "英文简历")

# ===== 联系方式 =====
contact_email_button = Selector.by_id("btn-contact-email", "打开联系表单")
contact_whatsapp_button = Selector.by_id("btn-contact-whatsapp", "WhatsApp 外链")
contact_linkedin_button = Selector.by_id("btn-contact-linkedin", "LinkedIn 外链")
contact_github_button = Selector.by_id("btn-contact-github", "GitHub 外链")

# ===== 联系表单（弹窗） =====
contact_name_input = Selector.by_id("input-name", "联系表单-姓名")
contact_email_input = Selector.by_id("input-email", "联系表单-邮箱")
contact_message_input = Selector.by_id("input-message", "联系表单-留言")
contact_send_button = Selector.by_id("btn-contact-send", "联系表单-发送")
contact_close_button = Selector.by_xpath("//button[@aria-label='Close']", "联系表单-关闭")
contact_modal = Selector.by_css("div.modal.show", "已打开的联系表单弹窗")
